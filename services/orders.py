import json
import logging
import random
import string
import time
from datetime import datetime
from decimal import Decimal

from flask import current_app

from errors import DuplicateOrderId, InvalidStatus, NotFound, ValidationError
from extensions import db
from models import Artwork, Order
from services.helpers import as_text, check_email, clean, commit, parse_int, require

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "Please fill in all required fields and ensure cart is not empty"


def generate_order_id(prefix=None):
    """Public order id: <prefix>-<ms timestamp>-<5 random chars>."""
    prefix = prefix or current_app.config.get("ORDER_ID_PREFIX", "CHT")
    suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=5))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


def _read_items(raw_items):
    if isinstance(raw_items, str):
        try:
            raw_items = json.loads(raw_items)
        except ValueError:
            raise ValidationError("Cart items are not valid JSON")
    if not isinstance(raw_items, (list, tuple)) or not raw_items:
        raise ValidationError(REQUIRED_MESSAGE)

    items = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            raise ValidationError("Each cart item must be an object")
        artwork_id = raw.get("artwork_id") or raw.get("art_id")
        if not artwork_id:
            raise ValidationError("Each cart item needs an artwork_id")
        quantity = parse_int(raw.get("quantity", 1), "Quantity")
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        items.append((str(artwork_id), quantity))
    return items


def _snapshot(artwork_id, quantity):
    """Freeze the artwork's current price and names into an order line."""
    artwork = db.session.get(Artwork, artwork_id)
    if artwork is None or artwork.status == "deleted":
        raise NotFound(f"Artwork {artwork_id} is not available")
    unit_price = Decimal(artwork.cost)
    line_total = unit_price * quantity
    return {
        "artwork_id": artwork.id,
        "art_name": artwork.art_name,
        "artist_name": artwork.artist.full_name if artwork.artist else None,
        "unit_price": float(unit_price),
        "quantity": quantity,
        "line_total": float(line_total),
    }, line_total


def create_order(form, order_id=None):
    values = require(
        form,
        ("customer_name", "customer_phone", "customer_email", "shipping_address"),
        REQUIRED_MESSAGE,
    )
    email = check_email(values["customer_email"].lower())
    items = _read_items(form.get("items") or form.get("cart_items"))

    order_id = as_text(order_id)
    if order_id:
        if Order.query.filter_by(order_id=order_id).first():
            raise DuplicateOrderId()
    else:
        order_id = generate_order_id()

    item_list = []
    total = Decimal("0")
    item_count = 0
    for artwork_id, quantity in items:
        line, line_total = _snapshot(artwork_id, quantity)
        item_list.append(line)
        total += line_total
        item_count += quantity

    order = Order(
        order_id=order_id,
        customer_name=values["customer_name"],
        customer_phone=values["customer_phone"],
        customer_email=email,
        shipping_address=values["shipping_address"],
        customer_message=clean(form, "customer_message"),
        total_amount=total,
        item_count=item_count,
        item_list=item_list,
        status="placed",
    )
    db.session.add(order)
    commit("placing an order")
    logger.info("Order %s placed: %s item(s), total %s", order.order_id, item_count, total)
    return order


def get_order(order_pk):
    order = db.session.get(Order, order_pk)
    if order is None:
        raise NotFound("Order not found")
    return order


def list_orders(status=None):
    query = Order.query
    if status:
        if status not in Order.STATUSES:
            raise InvalidStatus()
        query = query.filter(Order.status == status)
    return query.order_by(Order.creation_date_time.desc(), Order.id.desc()).all()


def update_order_status(order_pk, status):
    if status not in Order.STATUSES:
        raise InvalidStatus()
    order = get_order(order_pk)

    now = datetime.now()
    if status == "seen" and order.status == "placed":
        order.received_date_time = now
    elif status == "delivered":
        order.delivered_date_time = now
    order.status = status

    commit(f"updating order {order.order_id}")
    return f"Order {order.order_id} status updated to {status}"


def delete_order(order_pk):
    order = get_order(order_pk)
    public_id = order.order_id
    db.session.delete(order)
    commit(f"deleting order {public_id}")
    return f"Order {public_id} has been deleted successfully"


def track_order(order_id, email):
    order_id = as_text(order_id)
    email = as_text(email).lower()
    if not order_id or not email:
        raise ValidationError("Both Order ID and Email address are required")
    check_email(email)

    order = Order.query.filter_by(order_id=order_id, customer_email=email).first()
    if order is None:
        raise NotFound(
            "No order found with the provided Order ID and Email address. "
            "Please check your details and try again."
        )
    return order


def get_order_status(order_id):
    order = Order.query.filter_by(order_id=as_text(order_id)).first()
    if order is None:
        raise NotFound("Order not found. Please check your order ID.")
    return {
        "order_id": order.order_id,
        "customer_name": order.customer_name,
        "total_amount": float(order.total_amount),
        "item_count": order.item_count,
        "status": order.status,
        "creation_date_time": order.creation_date_time.isoformat() if order.creation_date_time else None,
        "received_date_time": order.received_date_time.isoformat() if order.received_date_time else None,
        "delivered_date_time": order.delivered_date_time.isoformat() if order.delivered_date_time else None,
    }
