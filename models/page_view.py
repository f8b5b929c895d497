from extensions import db


class PageView(db.Model):
    __tablename__ = "page_views"

    id = db.Column(db.Integer, primary_key=True)
    view_date = db.Column(db.Date, nullable=False, unique=True)
    view_count = db.Column(db.Integer, nullable=False, default=1)
