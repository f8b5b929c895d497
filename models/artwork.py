from datetime import datetime
from extensions import db
from .artist import new_public_id


class Artwork(db.Model):
    __tablename__ = "arts"

    STATUSES = ("listed", "ordered", "sold", "delivered", "deleted")
    EDITABLE_STATUSES = ("listed", "ordered", "sold", "delivered")
    SOLD_STATUSES = ("sold", "delivered")
    COLOR_TYPES = ("black_and_white", "color")

    id = db.Column(db.String(32), primary_key=True, default=new_public_id)
    artist_id = db.Column(db.String(32), db.ForeignKey("artists.id"), nullable=False, index=True)

    art_name = db.Column(db.String(150), nullable=False)
    art_category = db.Column(db.String(50), nullable=False, index=True)
    cost = db.Column(db.Numeric(10, 2), nullable=False)
    art_image = db.Column(db.String(255), nullable=False)
    art_description = db.Column(db.Text)
    work_hours = db.Column(db.String(50))
    size_of_art = db.Column(db.String(50))
    color_type = db.Column(db.Enum(*COLOR_TYPES, name="art_color_type"), default="color")

    status = db.Column(
        db.Enum(*STATUSES, name="art_status"),
        default="listed",
        nullable=False,
        index=True,
    )
    uploaded_at = db.Column(db.DateTime, default=datetime.now, index=True)

    artist = db.relationship("Artist", back_populates="artworks")

    def to_dict(self):
        return {
            "id": self.id,
            "artist_id": self.artist_id,
            "artist_name": self.artist.full_name if self.artist else None,
            "art_name": self.art_name,
            "art_category": self.art_category,
            "cost": float(self.cost) if self.cost is not None else None,
            "art_image": self.art_image,
            "art_description": self.art_description,
            "work_hours": self.work_hours,
            "size_of_art": self.size_of_art,
            "color_type": self.color_type,
            "status": self.status,
            "uploaded_at": self.uploaded_at.isoformat() if self.uploaded_at else None,
        }
