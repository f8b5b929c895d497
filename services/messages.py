import logging

from errors import InvalidStatus, NotFound
from extensions import db
from models import ContactMessage
from services.helpers import check_email, clean, commit, require

logger = logging.getLogger(__name__)


def submit_message(form):
    values = require(
        form,
        ("full_name", "email", "subject", "message"),
        "Please fill in all required fields",
    )
    msg = ContactMessage(
        full_name=values["full_name"],
        email=check_email(values["email"].lower()),
        phone=clean(form, "phone"),
        subject=values["subject"],
        message=values["message"],
        status="unread",
    )
    db.session.add(msg)
    commit("saving a contact message")
    logger.info("Contact message %s received from %s", msg.id, msg.email)
    return msg


def get_message(message_id):
    msg = db.session.get(ContactMessage, message_id)
    if msg is None:
        raise NotFound("Message not found")
    return msg


def open_message(message_id):
    """Fetch a message for the admin; an unread message becomes read."""
    msg = get_message(message_id)
    if msg.status == "unread":
        msg.status = "read"
        commit(f"marking message {message_id} as read")
    return msg


def list_messages(archived=False):
    query = ContactMessage.query
    if archived:
        query = query.filter(ContactMessage.status == "archived")
    else:
        query = query.filter(ContactMessage.status != "archived")
    return query.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc()).all()


def update_message_status(message_id, status):
    if status not in ContactMessage.STATUSES:
        raise InvalidStatus()
    msg = get_message(message_id)
    msg.status = status
    commit(f"updating message {message_id}")
    return f"Message status updated to {status}"


def delete_message(message_id):
    msg = get_message(message_id)
    db.session.delete(msg)
    commit(f"deleting message {message_id}")
    return "Message has been deleted successfully"
