import logging
from datetime import date

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from models import PageView

logger = logging.getLogger(__name__)


def _increment(day):
    """Bump an existing row; returns the number of rows updated."""
    return (
        PageView.query.filter(PageView.view_date == day)
        .update({PageView.view_count: PageView.view_count + 1}, synchronize_session=False)
    )


def record_page_view(day=None):
    """
    Count one view for `day` (today by default).

    Never raises: a failed counter must not break the page being served.
    """
    day = day or date.today()
    try:
        try:
            if not _increment(day):
                db.session.add(PageView(view_date=day, view_count=1))
            db.session.commit()
        except IntegrityError:
            # Another request inserted the day's row first
            db.session.rollback()
            _increment(day)
            db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.warning("Could not record page view for %s", day, exc_info=True)
        return False
    return True


def views_on(day):
    row = PageView.query.filter_by(view_date=day).first()
    return row.view_count if row else 0


def total_views():
    return db.session.query(db.func.coalesce(db.func.sum(PageView.view_count), 0)).scalar()
