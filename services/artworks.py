"""
Artwork CRUD.

Every write that touches an artist's counters does it in the same session
commit as the artwork row, using SQL-side arithmetic so concurrent requests
cannot lose an update.
"""

import logging

from errors import ArtistNotFound, GalleryError, InvalidStatus, NotFound, ValidationError
from extensions import db
from models import Artist, Artwork
from services import storage
from services.helpers import clean, commit, floored_decrement, parse_price, require

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "Art name, artist, category, and cost are required"


def _active_artist(artist_id):
    artist = db.session.get(Artist, artist_id) if artist_id else None
    if artist is None or artist.is_deleted:
        raise ArtistNotFound()
    return artist


def _bump_uploaded(artist_id, step):
    column = Artist.arts_uploaded
    value = column + 1 if step > 0 else floored_decrement(column)
    Artist.query.filter(Artist.id == artist_id).update({column: value}, synchronize_session=False)


def _bump_sold(artist_id, step):
    column = Artist.arts_sold
    value = column + 1 if step > 0 else floored_decrement(column)
    Artist.query.filter(Artist.id == artist_id).update({column: value}, synchronize_session=False)


def _read_fields(form):
    values = require(form, ("art_name", "artist_id", "art_category", "cost"), REQUIRED_MESSAGE)
    color_type = clean(form, "color_type") or "color"
    if color_type not in Artwork.COLOR_TYPES:
        raise ValidationError("Color type must be black_and_white or color")
    return {
        "art_name": values["art_name"],
        "artist_id": values["artist_id"],
        "art_category": values["art_category"],
        "cost": parse_price(values["cost"]),
        "art_description": clean(form, "art_description"),
        "work_hours": clean(form, "work_hours"),
        "size_of_art": clean(form, "size_of_art"),
        "color_type": color_type,
    }


def _read_status(form, default):
    status = clean(form, "status") or default
    if status not in Artwork.EDITABLE_STATUSES:
        raise InvalidStatus()
    return status


def get_artwork(artwork_id):
    artwork = db.session.get(Artwork, artwork_id) if artwork_id else None
    if artwork is None or artwork.status == "deleted":
        raise NotFound("Artwork not found")
    return artwork


def create_artwork(form, image):
    data = _read_fields(form)
    status = _read_status(form, "listed")
    if not storage.has_file(image):
        raise ValidationError("Art image is required")
    _active_artist(data["artist_id"])
    storage.check_image(image)

    art_image = storage.save_upload(image, "artworks", "artwork")
    artwork = Artwork(art_image=art_image, status=status, **data)
    db.session.add(artwork)
    _bump_uploaded(data["artist_id"], +1)
    if status in Artwork.SOLD_STATUSES:
        _bump_sold(data["artist_id"], +1)
    try:
        commit("creating an artwork")
    except GalleryError:
        storage.discard_upload("artworks", art_image)
        raise

    logger.info("Artwork %s created for artist %s", artwork.id, artwork.artist_id)
    return artwork


def update_artwork(artwork_id, form, image=None):
    artwork = get_artwork(artwork_id)
    data = _read_fields(form)
    status = _read_status(form, artwork.status)
    if data["artist_id"] != artwork.artist_id:
        _active_artist(data["artist_id"])

    old_artist_id = artwork.artist_id
    new_artist_id = data["artist_id"]
    was_sold = artwork.status in Artwork.SOLD_STATUSES
    is_sold = status in Artwork.SOLD_STATUSES

    old_image = None
    new_image = None
    if storage.has_file(image):
        new_image = storage.save_upload(image, "artworks", "artwork")
        old_image = artwork.art_image
        artwork.art_image = new_image

    for key, value in data.items():
        setattr(artwork, key, value)
    artwork.status = status

    if old_artist_id != new_artist_id:
        _bump_uploaded(old_artist_id, -1)
        _bump_uploaded(new_artist_id, +1)
    if was_sold:
        _bump_sold(old_artist_id, -1)
    if is_sold:
        _bump_sold(new_artist_id, +1)

    try:
        commit(f"updating artwork {artwork_id}")
    except GalleryError:
        storage.discard_upload("artworks", new_image)
        raise

    if old_image and old_image != new_image:
        storage.discard_upload("artworks", old_image)
    return artwork


def soft_delete_artwork(artwork_id):
    artwork = get_artwork(artwork_id)
    was_sold = artwork.status in Artwork.SOLD_STATUSES

    artwork.status = "deleted"
    _bump_uploaded(artwork.artist_id, -1)
    if was_sold:
        _bump_sold(artwork.artist_id, -1)
    commit(f"deleting artwork {artwork_id}")
    logger.info("Artwork %s soft-deleted", artwork.id)
    return f'Artwork "{artwork.art_name}" has been deleted successfully'
