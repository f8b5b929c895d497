"""
Artist applications: public submission, admin review and promotion of an
approved application into an Artist account.
"""

import logging
from datetime import datetime
from io import BytesIO

from docx import Document
from docx.shared import Inches
from sqlalchemy.exc import SQLAlchemyError

from errors import DuplicateEmail, GalleryError, InvalidStatus, NotFound, StorageFailure, ValidationError
from extensions import db
from models import Artist, ArtistApplication
from services import storage
from services.helpers import as_text, check_email, clean, commit, parse_int, require
from services.outcome import Outcome

logger = logging.getLogger(__name__)

SOCIAL_FIELDS = ("instagram", "facebook", "twitter", "tiktok", "youtube")


def submit_application(form, photo=None):
    values = require(
        form,
        ("full_name", "age", "city", "district", "email"),
        "Please fill in all required fields",
    )
    email = check_email(values["email"].lower())
    age = parse_int(values["age"], "Age")
    if age <= 0:
        raise ValidationError("Age must be greater than zero")

    if ArtistApplication.query.filter_by(email=email).first():
        raise DuplicateEmail("An application with this email already exists")

    if storage.has_file(photo):
        storage.check_image(photo)

    # Everything is validated; only now touch the disk
    profile_picture = None
    if storage.has_file(photo):
        profile_picture = storage.save_upload(photo, "applications", "application")

    application = ArtistApplication(
        full_name=values["full_name"],
        age=age,
        started_art_at=clean(form, "started_art_at"),
        school_college=clean(form, "school_college"),
        city=values["city"],
        district=values["district"],
        email=email,
        phone=clean(form, "phone"),
        socials={name: clean(form, name) or "" for name in SOCIAL_FIELDS},
        message=clean(form, "message"),
        bio=clean(form, "bio"),
        profile_picture=profile_picture,
        status="pending",
    )
    db.session.add(application)
    try:
        commit("submitting an application")
    except GalleryError:
        storage.discard_upload("applications", profile_picture)
        raise

    logger.info("Application %s received from %s", application.id, email)
    return application


def get_application(application_id):
    application = db.session.get(ArtistApplication, application_id)
    if application is None:
        raise NotFound("Application not found")
    return application


def list_applications(status=None):
    query = ArtistApplication.query
    if status:
        if status not in ArtistApplication.STATUSES:
            raise InvalidStatus()
        query = query.filter(ArtistApplication.status == status)
    return query.order_by(ArtistApplication.received_date.desc(), ArtistApplication.id.desc()).all()


def update_application_status(application_id, status, reviewer, rejection_reason=None):
    if status not in ArtistApplication.STATUSES:
        raise InvalidStatus()
    application = get_application(application_id)

    application.status = status
    application.reviewed_by = reviewer
    application.reviewed_date = datetime.now()
    reason = as_text(rejection_reason)
    if status == "rejected" and reason:
        application.rejection_reason = reason
    commit(f"updating application {application_id}")
    logger.info("Application %s set to %s by %s", application.id, status, reviewer)

    outcome = Outcome(application, f"Application status updated to {status}")
    if status != "approved":
        return outcome

    # Best-effort: the review above is already committed and stays committed
    outcome.cascade = "create_artist"
    try:
        artist, created = promote_to_artist(application)
    except (SQLAlchemyError, GalleryError) as exc:
        db.session.rollback()
        logger.error("Could not create artist for application %s", application.id, exc_info=True)
        outcome.cascade_error = str(exc) or exc.__class__.__name__
        outcome.message = f"{outcome.message}, but the artist account could not be created"
        return outcome

    outcome.cascade_done = created
    if created:
        outcome.message = f"{outcome.message} and artist account created"
    else:
        outcome.message = f"{outcome.message}; artist account already exists"
    return outcome


def promote_to_artist(application):
    """
    Create the Artist row for an approved application.

    Returns (artist, created). An artist already holding the application's
    email (whatever its status) is returned untouched.
    """
    existing = Artist.query.filter(db.func.lower(Artist.email) == application.email.lower()).first()
    if existing is not None:
        return existing, False

    profile_picture = None
    if application.profile_picture:
        try:
            profile_picture = storage.copy_upload(
                "applications", application.profile_picture, "profiles", "artist"
            )
        except StorageFailure:
            logger.warning(
                "Photo of application %s was not copied; artist created without photo",
                application.id,
                exc_info=True,
            )

    artist = Artist(
        full_name=application.full_name,
        age=application.age,
        started_art_at=application.started_art_at,
        school_college=application.school_college,
        city=application.city,
        district=application.district,
        email=application.email,
        phone=application.phone,
        socials=dict(application.socials or {}),
        bio=application.bio,
        profile_picture=profile_picture,
        arts_uploaded=0,
        arts_sold=0,
        status="active",
    )
    db.session.add(artist)
    try:
        db.session.commit()
    except SQLAlchemyError:
        storage.discard_upload("profiles", profile_picture)
        raise
    logger.info("Artist %s created from application %s", artist.id, application.id)
    return artist, True


def delete_application(application_id):
    application = get_application(application_id)
    name = application.full_name
    photo = application.profile_picture

    db.session.delete(application)
    commit(f"deleting application {application_id}")
    if photo:
        storage.discard_upload("applications", photo)
    return f'Application from "{name}" has been deleted successfully'


def export_application_docx(application_id):
    """Render an application as a Word document; returns (buffer, filename)."""
    app_item = get_application(application_id)

    doc = Document()
    doc.add_heading("ARTIST APPLICATION", level=0).alignment = 1

    doc.add_heading("1. Personal information", level=1)
    info = [
        ("Full name", app_item.full_name),
        ("Age", app_item.age),
        ("Started art at", app_item.started_art_at),
        ("School / college", app_item.school_college),
    ]
    for label, value in info:
        doc.add_paragraph(f"{label}: {value or ''}")

    doc.add_heading("2. Contact", level=1)
    doc.add_paragraph(f"Email: {app_item.email or ''}")
    doc.add_paragraph(f"Phone: {app_item.phone or ''}")
    doc.add_paragraph(f"City: {app_item.city or ''} | District: {app_item.district or ''}")
    for name, link in (app_item.socials or {}).items():
        if link:
            doc.add_paragraph(f"{name.capitalize()}: {link}")

    doc.add_heading("3. About", level=1)
    doc.add_paragraph(app_item.bio or "")
    doc.add_paragraph(app_item.message or "")

    doc.add_heading("4. Review", level=1)
    doc.add_paragraph(f"Status: {app_item.status}")
    doc.add_paragraph(f"Reviewed by: {app_item.reviewed_by or ''}")
    if app_item.rejection_reason:
        doc.add_paragraph(f"Rejection reason: {app_item.rejection_reason}")

    doc.add_heading("5. Photo", level=1)
    if storage.file_exists("applications", app_item.profile_picture):
        path = f"{storage.folder_for('applications')}/{app_item.profile_picture}"
        try:
            doc.add_picture(path, width=Inches(2))
        except Exception:
            doc.add_paragraph("(Could not read this image)")
    else:
        doc.add_paragraph("None")

    buffer = BytesIO()
    doc.save(buffer)
    buffer.seek(0)
    filename = f"Application_{app_item.id}.docx"
    return buffer, filename
