from extensions import db
from datetime import datetime


class ArtistApplication(db.Model):
    __tablename__ = "artist_applications"

    STATUSES = ("pending", "under_review", "approved", "rejected")

    id = db.Column(db.Integer, primary_key=True)

    # Applicant
    full_name = db.Column(db.String(100), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    started_art_at = db.Column(db.String(50))
    school_college = db.Column(db.String(200))
    city = db.Column(db.String(100), nullable=False)
    district = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(100), nullable=False, unique=True)
    phone = db.Column(db.String(20))
    socials = db.Column(db.JSON, default=dict)    # instagram, facebook, twitter, tiktok, youtube
    message = db.Column(db.Text)
    bio = db.Column(db.Text)
    profile_picture = db.Column(db.String(255))    # file name inside the applications folder

    # Review
    status = db.Column(
        db.Enum(*STATUSES, name="application_status"),
        default="pending",
        nullable=False,
        index=True,
    )
    reviewed_by = db.Column(db.String(100))
    reviewed_date = db.Column(db.DateTime)
    rejection_reason = db.Column(db.Text)

    received_date = db.Column(db.DateTime, default=datetime.now, index=True)
    created_at = db.Column(db.DateTime, default=datetime.now)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

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
            "message": self.message,
            "bio": self.bio,
            "profile_picture": self.profile_picture,
            "status": self.status,
            "reviewed_by": self.reviewed_by,
            "reviewed_date": self.reviewed_date.isoformat() if self.reviewed_date else None,
            "rejection_reason": self.rejection_reason,
            "received_date": self.received_date.isoformat() if self.received_date else None,
        }
