import uuid
from datetime import datetime
from extensions import db


def new_public_id():
    return uuid.uuid4().hex


class Artist(db.Model):
    __tablename__ = "artists"

    STATUSES = ("active", "deleted")

    id = db.Column(db.String(32), primary_key=True, default=new_public_id)
    full_name = db.Column(db.String(100), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    started_art_at = db.Column(db.String(50))
    school_college = db.Column(db.String(200))
    city = db.Column(db.String(100))
    district = db.Column(db.String(100))
    email = db.Column(db.String(100), nullable=False, index=True)
    phone = db.Column(db.String(20))
    socials = db.Column(db.JSON, default=dict)
    bio = db.Column(db.Text)
    profile_picture = db.Column(db.String(255))

    # Counters, updated in the same transaction as the arts rows
    arts_uploaded = db.Column(db.Integer, nullable=False, default=0)
    arts_sold = db.Column(db.Integer, nullable=False, default=0)

    status = db.Column(
        db.Enum(*STATUSES, name="artist_status"),
        default="active",
        nullable=False,
        index=True,
    )
    joined_at = db.Column(db.DateTime, default=datetime.now)

    artworks = db.relationship("Artwork", back_populates="artist", lazy=True)

    @property
    def is_deleted(self):
        return self.status == "deleted"

    def to_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "age": self.age,
            "started_art_at": self.started_art_at,
            "school_college": self.school_college,
            "city": self.city,
            "district": self.district,
            "email": self.email,
            "phone": self.phone,
            "socials": self.socials or {},
            "bio": self.bio,
            "profile_picture": self.profile_picture,
            "arts_uploaded": self.arts_uploaded,
            "arts_sold": self.arts_sold,
            "status": self.status,
            "joined_at": self.joined_at.isoformat() if self.joined_at else None,
        }
