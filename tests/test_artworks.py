import io
import os

import pytest

from errors import ArtistNotFound, InvalidStatus, NotFound, PersistenceFailure, ValidationError
from extensions import db
from models import Artist, Artwork
from services import artworks


def counters(artist_id):
    artist = db.session.get(Artist, artist_id)
    db.session.refresh(artist)
    return artist.arts_uploaded, artist.arts_sold


def test_create_artwork_increments_uploaded(app, make_artist, artwork_form, image):
    artist = make_artist()

    artwork = artworks.create_artwork(artwork_form(artist.id), image())

    assert artwork.status == "listed"
    assert artwork.art_image.startswith("artwork_")
    assert os.path.isfile(os.path.join(app.config["UPLOAD_FOLDER_ARTWORKS"], artwork.art_image))
    assert counters(artist.id) == (1, 0)


def test_create_sold_artwork_counts_as_sold(app, make_artist, artwork_form, image):
    artist = make_artist()
    artworks.create_artwork(artwork_form(artist.id, status="sold"), image())
    assert counters(artist.id) == (1, 1)


def test_create_requires_image(app, make_artist, artwork_form):
    artist = make_artist()
    with pytest.raises(ValidationError) as err:
        artworks.create_artwork(artwork_form(artist.id), None)
    assert err.value.message == "Art image is required"


@pytest.mark.parametrize("cost", ["0", "-5", "free"])
def test_create_rejects_bad_cost(app, make_artist, artwork_form, image, cost):
    artist = make_artist()
    with pytest.raises(ValidationError):
        artworks.create_artwork(artwork_form(artist.id, cost=cost), image())


def test_create_for_deleted_artist_is_rejected(app, make_artist, artwork_form, image):
    artist = make_artist(status="deleted")

    with pytest.raises(ArtistNotFound) as err:
        artworks.create_artwork(artwork_form(artist.id), image())

    assert err.value.status_code == 400
    assert os.listdir(app.config["UPLOAD_FOLDER_ARTWORKS"]) == []


def test_failed_commit_removes_saved_image(app, make_artist, artwork_form, image, monkeypatch):
    artist = make_artist()

    def failing_commit(action):
        db.session.rollback()
        raise PersistenceFailure(detail=action)

    monkeypatch.setattr(artworks, "commit", failing_commit)
    with pytest.raises(PersistenceFailure):
        artworks.create_artwork(artwork_form(artist.id), image())

    assert os.listdir(app.config["UPLOAD_FOLDER_ARTWORKS"]) == []
    assert Artwork.query.count() == 0
    assert counters(artist.id) == (0, 0)


def test_counter_is_created_minus_deleted(app, make_artist, artwork_form, image):
    artist = make_artist()
    created = [artworks.create_artwork(artwork_form(artist.id), image()) for _ in range(4)]

    for artwork in created[:3]:
        artworks.soft_delete_artwork(artwork.id)

    assert counters(artist.id) == (1, 0)


def test_counter_never_goes_negative(app, make_artist, add_artwork):
    artist = make_artist()
    artwork = add_artwork(artist, status="sold")

    artworks.soft_delete_artwork(artwork.id)

    assert counters(artist.id) == (0, 0)


def test_soft_delete_twice_is_not_found(app, make_artist, artwork_form, image):
    artist = make_artist()
    artwork = artworks.create_artwork(artwork_form(artist.id, art_name="Dusk"), image())

    assert artworks.soft_delete_artwork(artwork.id) == 'Artwork "Dusk" has been deleted successfully'
    with pytest.raises(NotFound):
        artworks.soft_delete_artwork(artwork.id)
    assert db.session.get(Artwork, artwork.id).status == "deleted"


def test_reassignment_moves_counters(app, make_artist, artwork_form, image):
    old, new = make_artist(), make_artist()
    artwork = artworks.create_artwork(artwork_form(old.id, status="sold"), image())

    artworks.update_artwork(artwork.id, artwork_form(new.id, status="sold"))

    assert counters(old.id) == (0, 0)
    assert counters(new.id) == (1, 1)


def test_reassignment_to_deleted_artist_fails(app, make_artist, artwork_form, image):
    owner, gone = make_artist(), make_artist(status="deleted")
    artwork = artworks.create_artwork(artwork_form(owner.id), image())

    with pytest.raises(ArtistNotFound):
        artworks.update_artwork(artwork.id, artwork_form(gone.id))
    assert counters(owner.id) == (1, 0)


def test_status_changes_adjust_sold_counter(app, make_artist, artwork_form, image):
    artist = make_artist()
    artwork = artworks.create_artwork(artwork_form(artist.id), image())

    artworks.update_artwork(artwork.id, artwork_form(artist.id, status="sold"))
    assert counters(artist.id) == (1, 1)
    artworks.update_artwork(artwork.id, artwork_form(artist.id, status="delivered"))
    assert counters(artist.id) == (1, 1)
    artworks.update_artwork(artwork.id, artwork_form(artist.id, status="listed"))
    assert counters(artist.id) == (1, 0)


def test_update_cannot_set_deleted(app, make_artist, artwork_form, image):
    artist = make_artist()
    artwork = artworks.create_artwork(artwork_form(artist.id), image())

    with pytest.raises(InvalidStatus):
        artworks.update_artwork(artwork.id, artwork_form(artist.id, status="deleted"))


def test_update_replaces_image(app, make_artist, artwork_form, image):
    artist = make_artist()
    artwork = artworks.create_artwork(artwork_form(artist.id), image("first.png"))
    old = artwork.art_image

    artworks.update_artwork(artwork.id, artwork_form(artist.id, cost="200"), image("second.jpg"))

    folder = app.config["UPLOAD_FOLDER_ARTWORKS"]
    assert os.listdir(folder) == [artwork.art_image]
    assert artwork.art_image != old
    assert float(artwork.cost) == 200.0


def test_admin_artwork_routes(admin_client, make_artist):
    artist = make_artist()
    data = {
        "art_name": "Lotus Pond",
        "artist_id": artist.id,
        "art_category": "Watercolor",
        "cost": "80",
        "art_image": (io.BytesIO(b"img"), "lotus.png"),
    }
    resp = admin_client.post("/admin/artworks/create", data=data, content_type="multipart/form-data")
    assert resp.status_code == 201
    artwork_id = resp.get_json()["artwork"]["id"]

    resp = admin_client.get(f"/admin/artworks/{artwork_id}")
    assert resp.get_json()["artist_name"] == artist.full_name

    resp = admin_client.post(f"/admin/artworks/{artwork_id}/delete")
    assert resp.status_code == 200
    assert counters(artist.id) == (0, 0)


def test_admin_create_with_unknown_artist_is_400(admin_client, artwork_form):
    data = artwork_form("does-not-exist")
    data["art_image"] = (io.BytesIO(b"img"), "x.png")
    resp = admin_client.post("/admin/artworks/create", data=data, content_type="multipart/form-data")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Selected artist not found"}
