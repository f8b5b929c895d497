from datetime import datetime
from extensions import db


class ContactMessage(db.Model):
    __tablename__ = "contact_messages"

    STATUSES = ("unread", "read", "archived")

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20))
    subject = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)

    status = db.Column(
        db.Enum(*STATUSES, name="message_status"),
        default="unread",
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, default=datetime.now)

    def to_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "subject": self.subject,
            "message": self.message,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
