import pytest

from errors import InvalidStatus, NotFound, ValidationError
from services import messages


def message_form(**overrides):
    form = {
        "full_name": "Rohan Kapoor",
        "email": "rohan@example.com",
        "subject": "Commission",
        "message": "Do you take portrait commissions?",
    }
    form.update(overrides)
    return form


def test_submit_message_is_unread(app):
    msg = messages.submit_message(message_form())
    assert msg.status == "unread"


@pytest.mark.parametrize("overrides", [{"subject": ""}, {"message": " "}, {"email": "rohan@"}])
def test_submit_message_validation(app, overrides):
    with pytest.raises(ValidationError):
        messages.submit_message(message_form(**overrides))


def test_open_message_marks_unread_as_read(app):
    msg = messages.submit_message(message_form())

    opened = messages.open_message(msg.id)

    assert opened.status == "read"


def test_open_message_keeps_archived(app):
    msg = messages.submit_message(message_form())
    messages.update_message_status(msg.id, "archived")

    assert messages.open_message(msg.id).status == "archived"


def test_inbox_and_archive(app):
    keep = messages.submit_message(message_form())
    old = messages.submit_message(message_form(subject="Old"))
    messages.update_message_status(old.id, "archived")

    assert [m.id for m in messages.list_messages()] == [keep.id]
    assert [m.id for m in messages.list_messages(archived=True)] == [old.id]


def test_status_and_delete_errors(app):
    msg = messages.submit_message(message_form())
    with pytest.raises(InvalidStatus):
        messages.update_message_status(msg.id, "spam")
    messages.delete_message(msg.id)
    with pytest.raises(NotFound):
        messages.delete_message(msg.id)


def test_contact_route_and_admin_inbox(client, admin_client):
    resp = client.post("/contact", data=message_form())
    assert resp.status_code == 201

    inbox = admin_client.get("/admin/messages").get_json()["messages"]
    assert len(inbox) == 1
    assert inbox[0]["status"] == "unread"

    resp = admin_client.get(f"/admin/messages/{inbox[0]['id']}")
    assert resp.get_json()["status"] == "read"
