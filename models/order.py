from datetime import datetime
from extensions import db


class Order(db.Model):
    __tablename__ = "orders"

    STATUSES = ("placed", "seen", "contacted", "sold", "delivered", "canceled")

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.String(50), nullable=False, unique=True)  # public id used for customer lookups

    customer_name = db.Column(db.String(100), nullable=False)
    customer_phone = db.Column(db.String(20), nullable=False)
    customer_email = db.Column(db.String(100), nullable=False, index=True)
    shipping_address = db.Column(db.Text, nullable=False)
    customer_message = db.Column(db.Text)

    # Snapshot taken when the order is placed
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    item_count = db.Column(db.Integer, nullable=False)
    item_list = db.Column(db.JSON, nullable=False)

    creation_date_time = db.Column(db.DateTime, default=datetime.now, index=True)
    received_date_time = db.Column(db.DateTime)
    delivered_date_time = db.Column(db.DateTime)

    status = db.Column(
        db.Enum(*STATUSES, name="order_status"),
        default="placed",
        nullable=False,
        index=True,
    )

    def to_dict(self):
        return {
            "id": self.id,
            "order_id": self.order_id,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "customer_email": self.customer_email,
            "shipping_address": self.shipping_address,
            "customer_message": self.customer_message,
            "total_amount": float(self.total_amount),
            "item_count": self.item_count,
            "item_list": self.item_list or [],
            "status": self.status,
            "creation_date_time": self.creation_date_time.isoformat() if self.creation_date_time else None,
            "received_date_time": self.received_date_time.isoformat() if self.received_date_time else None,
            "delivered_date_time": self.delivered_date_time.isoformat() if self.delivered_date_time else None,
        }
