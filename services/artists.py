import logging

from errors import DuplicateEmail, GalleryError, NotFound, ValidationError
from extensions import db
from models import Artist, Artwork
from services import storage
from services.helpers import as_text, check_email, clean, commit, parse_int, require

logger = logging.getLogger(__name__)

SOCIAL_FIELDS = ("instagram", "facebook", "twitter", "tiktok", "youtube")
PROFILE_FIELDS = ("started_art_at", "school_college", "city", "district", "phone", "bio")


def get_artist(artist_id, include_deleted=False):
    artist = db.session.get(Artist, artist_id) if artist_id else None
    if artist is None or (artist.is_deleted and not include_deleted):
        raise NotFound("Artist not found")
    return artist


def _email_taken(email, exclude_id=None):
    query = Artist.query.filter(
        db.func.lower(Artist.email) == email,
        Artist.status != "deleted",
    )
    if exclude_id:
        query = query.filter(Artist.id != exclude_id)
    return query.first() is not None


def _read_profile(form):
    values = require(form, ("full_name", "email", "age"), "Full name, email and age are required")
    age = parse_int(values["age"], "Age")
    if age <= 0:
        raise ValidationError("Age must be greater than zero")
    data = {
        "full_name": values["full_name"],
        "email": check_email(values["email"].lower()),
        "age": age,
    }
    for key in PROFILE_FIELDS:
        data[key] = clean(form, key)
    socials = form.get("socials")
    if isinstance(socials, dict):
        data["socials"] = {name: as_text(socials.get(name)) for name in SOCIAL_FIELDS}
    elif any(name in form for name in SOCIAL_FIELDS):
        data["socials"] = {name: clean(form, name) or "" for name in SOCIAL_FIELDS}
    return data


def create_artist(form, photo=None):
    data = _read_profile(form)
    if _email_taken(data["email"]):
        raise DuplicateEmail("Email already exists for another artist")

    profile_picture = None
    if storage.has_file(photo):
        profile_picture = storage.save_upload(photo, "profiles", "artist")

    artist = Artist(
        profile_picture=profile_picture,
        arts_uploaded=0,
        arts_sold=0,
        status="active",
        **data,
    )
    db.session.add(artist)
    try:
        commit("creating an artist")
    except GalleryError:
        storage.discard_upload("profiles", profile_picture)
        raise
    logger.info("Artist %s created", artist.id)
    return artist


def update_artist(artist_id, form, photo=None):
    artist = get_artist(artist_id)
    data = _read_profile(form)
    if _email_taken(data["email"], exclude_id=artist.id):
        raise DuplicateEmail("Email already exists for another artist")

    old_picture = None
    new_picture = None
    if storage.has_file(photo):
        new_picture = storage.save_upload(photo, "profiles", f"artist_{artist.id}")
        old_picture = artist.profile_picture
        artist.profile_picture = new_picture

    for key, value in data.items():
        setattr(artist, key, value)

    try:
        commit(f"updating artist {artist_id}")
    except GalleryError:
        storage.discard_upload("profiles", new_picture)
        raise

    # The new photo is committed; the old file can go
    if old_picture and old_picture != new_picture:
        storage.discard_upload("profiles", old_picture)
    return artist


def soft_delete_artist(artist_id):
    artist = get_artist(artist_id)
    artist.status = "deleted"
    commit(f"deleting artist {artist_id}")
    logger.info("Artist %s soft-deleted", artist.id)
    return f"Artist {artist.full_name} has been deleted successfully"


def reconcile_artist_counts():
    """
    Recompute arts_uploaded and arts_sold from the arts table.

    Returns the number of artists whose stored counters had drifted.
    """
    uploaded = dict(
        db.session.query(Artwork.artist_id, db.func.count(Artwork.id))
        .filter(Artwork.status != "deleted")
        .group_by(Artwork.artist_id)
        .all()
    )
    sold = dict(
        db.session.query(Artwork.artist_id, db.func.count(Artwork.id))
        .filter(Artwork.status.in_(Artwork.SOLD_STATUSES))
        .group_by(Artwork.artist_id)
        .all()
    )

    fixed = 0
    for artist in Artist.query.all():
        real_uploaded = uploaded.get(artist.id, 0)
        real_sold = sold.get(artist.id, 0)
        if artist.arts_uploaded != real_uploaded or artist.arts_sold != real_sold:
            logger.warning(
                "Artist %s counters drifted: uploaded %s -> %s, sold %s -> %s",
                artist.id, artist.arts_uploaded, real_uploaded, artist.arts_sold, real_sold,
            )
            artist.arts_uploaded = real_uploaded
            artist.arts_sold = real_sold
            fixed += 1
    commit("reconciling artist counters")
    return fixed
