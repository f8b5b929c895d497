import logging
import re
from decimal import Decimal, InvalidOperation

from sqlalchemy import case
from sqlalchemy.exc import SQLAlchemyError

from errors import PersistenceFailure, ValidationError
from extensions import db

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def as_text(value):
    """Any submitted value as a stripped string; None becomes ''."""
    return "" if value is None else str(value).strip()


def clean(form, key):
    """Stripped string value of a form field, or None when blank."""
    value = form.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require(form, keys, message):
    values = {key: clean(form, key) for key in keys}
    if any(v is None for v in values.values()):
        raise ValidationError(message)
    return values


def parse_int(value, field):
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a whole number")


def parse_price(value, field="cost"):
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not price.is_finite() or price <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return price.quantize(Decimal("0.01"))


def check_email(email):
    if not email or not EMAIL_RE.match(email):
        raise ValidationError("Please enter a valid email address")
    return email


def floored_decrement(column):
    """SQL expression for column - 1 that never goes below zero."""
    return case((column > 0, column - 1), else_=0)


def commit(action):
    """Commit the session; on failure roll back and raise an opaque error."""
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Database error while %s", action, exc_info=True)
        raise PersistenceFailure(detail=str(exc)) from exc
