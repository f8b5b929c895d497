import os

import pytest

from errors import DuplicateEmail, InvalidStatus, NotFound, PersistenceFailure, ValidationError
from models import Artist, ArtistApplication
from services import applications


def application_form(**overrides):
    form = {
        "full_name": "Mira Iyer",
        "age": "24",
        "city": "Chennai",
        "district": "Adyar",
        "email": "Mira.Iyer@Example.com",
        "phone": "9876543210",
        "instagram": "@mira_paints",
        "bio": "Watercolours of the coast",
        "message": "Would love to join",
    }
    form.update(overrides)
    return form


def test_submit_application_stores_pending_with_lowercased_email(app):
    application = applications.submit_application(application_form())

    assert application.status == "pending"
    assert application.email == "mira.iyer@example.com"
    assert application.socials["instagram"] == "@mira_paints"
    assert application.socials["youtube"] == ""


@pytest.mark.parametrize("missing", ["full_name", "age", "city", "district", "email"])
def test_submit_application_requires_fields(app, missing):
    with pytest.raises(ValidationError):
        applications.submit_application(application_form(**{missing: "  "}))


def test_submit_application_rejects_duplicate_email(app):
    applications.submit_application(application_form())
    with pytest.raises(DuplicateEmail):
        applications.submit_application(application_form(email="mira.iyer@example.com"))


def test_rejected_photo_leaves_no_file(app, image):
    with pytest.raises(ValidationError):
        applications.submit_application(application_form(), image("notes.txt"))

    assert os.listdir(app.config["UPLOAD_FOLDER_APPLICATIONS"]) == []
    assert ArtistApplication.query.count() == 0


def test_invalid_status_is_checked_before_lookup(app):
    with pytest.raises(InvalidStatus):
        applications.update_application_status(999, "hired", reviewer="curator")
    with pytest.raises(NotFound):
        applications.update_application_status(999, "approved", reviewer="curator")


def test_reject_with_reason(app):
    application = applications.submit_application(application_form())

    outcome = applications.update_application_status(
        application.id, "rejected", reviewer="curator", rejection_reason="  Portfolio too small "
    )

    assert outcome.cascade is None
    assert outcome.message == "Application status updated to rejected"
    assert application.rejection_reason == "Portfolio too small"
    assert application.reviewed_by == "curator"
    assert application.reviewed_date is not None
    assert Artist.query.count() == 0


def test_reject_without_reason_is_accepted(app):
    application = applications.submit_application(application_form())
    applications.update_application_status(application.id, "rejected", reviewer="curator")
    assert application.status == "rejected"
    assert application.rejection_reason is None


def test_approval_creates_artist_and_copies_photo(app, image):
    application = applications.submit_application(application_form(), image("me.png"))

    outcome = applications.update_application_status(application.id, "approved", reviewer="curator")

    assert outcome.fully_succeeded
    assert outcome.cascade_done
    assert "artist account created" in outcome.message
    artist = Artist.query.filter_by(email="mira.iyer@example.com").one()
    assert artist.status == "active"
    assert (artist.arts_uploaded, artist.arts_sold) == (0, 0)
    assert artist.socials["instagram"] == "@mira_paints"
    assert artist.profile_picture.startswith("artist_")
    assert os.path.isfile(os.path.join(app.config["UPLOAD_FOLDER_PROFILES"], artist.profile_picture))


def test_approving_twice_creates_one_artist(app):
    application = applications.submit_application(application_form())

    applications.update_application_status(application.id, "approved", reviewer="curator")
    second = applications.update_application_status(application.id, "approved", reviewer="curator")

    assert Artist.query.count() == 1
    assert second.fully_succeeded
    assert not second.cascade_done
    assert "already exists" in second.message


def test_existing_deleted_artist_blocks_creation(app, make_artist):
    make_artist(email="mira.iyer@example.com", status="deleted")
    application = applications.submit_application(application_form())

    outcome = applications.update_application_status(application.id, "approved", reviewer="curator")

    assert Artist.query.count() == 1
    assert not outcome.cascade_done


def test_missing_photo_file_still_creates_artist(app, image):
    application = applications.submit_application(application_form(), image("me.png"))
    os.remove(os.path.join(app.config["UPLOAD_FOLDER_APPLICATIONS"], application.profile_picture))

    outcome = applications.update_application_status(application.id, "approved", reviewer="curator")

    assert outcome.cascade_done
    assert Artist.query.one().profile_picture is None


def test_failed_artist_creation_keeps_the_approval(app, monkeypatch):
    application = applications.submit_application(application_form())

    def boom(_application):
        raise PersistenceFailure(detail="disk full")

    monkeypatch.setattr(applications, "promote_to_artist", boom)
    outcome = applications.update_application_status(application.id, "approved", reviewer="curator")

    assert not outcome.fully_succeeded
    assert outcome.cascade == "create_artist"
    assert "could not be created" in outcome.message
    assert applications.get_application(application.id).status == "approved"
    assert outcome.to_dict()["cascade"]["done"] is False


def test_delete_application_removes_photo(app, image):
    application = applications.submit_application(application_form(), image("me.png"))
    photo = application.profile_picture

    message = applications.delete_application(application.id)

    assert "Mira Iyer" in message
    assert ArtistApplication.query.count() == 0
    assert not os.path.exists(os.path.join(app.config["UPLOAD_FOLDER_APPLICATIONS"], photo))


def test_list_applications_filters_by_status(app):
    first = applications.submit_application(application_form())
    applications.submit_application(application_form(email="other@example.com"))
    applications.update_application_status(first.id, "under_review", reviewer="curator")

    assert [a.id for a in applications.list_applications("under_review")] == [first.id]
    assert len(applications.list_applications()) == 2
    with pytest.raises(InvalidStatus):
        applications.list_applications("hired")


def test_export_application_docx(app):
    application = applications.submit_application(application_form())

    buffer, filename = applications.export_application_docx(application.id)

    assert filename == f"Application_{application.id}.docx"
    assert buffer.read(2) == b"PK"


def test_apply_route_and_admin_review(client, admin_client):
    resp = client.post("/apply", data=application_form())
    assert resp.status_code == 201
    app_id = resp.get_json()["application_id"]

    resp = admin_client.post(f"/admin/applications/{app_id}/status", json={"status": "approved"})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["cascade"]["done"] is True
    assert Artist.query.one().email == "mira.iyer@example.com"
    assert applications.get_application(app_id).reviewed_by == "curator"


def test_apply_route_reports_duplicate(client):
    client.post("/apply", data=application_form())
    resp = client.post("/apply", data=application_form())
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "An application with this email already exists"
