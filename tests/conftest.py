import io
from decimal import Decimal

import pytest
from werkzeug.datastructures import FileStorage

from app import create_app
from extensions import db
from models import Admin, Artist, Artwork


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "UPLOAD_FOLDER_PROFILES": str(tmp_path / "profiles"),
        "UPLOAD_FOLDER_ARTWORKS": str(tmp_path / "artworks"),
        "UPLOAD_FOLDER_APPLICATIONS": str(tmp_path / "applications"),
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    admin = Admin(username="curator")
    admin.set_password("s3cret")
    db.session.add(admin)
    db.session.commit()

    client = app.test_client()
    resp = client.post("/auth/login", json={"username": "curator", "password": "s3cret"})
    assert resp.status_code == 200
    return client


@pytest.fixture
def image():
    """Factory for an uploaded image."""
    def make(filename="art.png", content=b"\x89PNG fake image bytes"):
        return FileStorage(stream=io.BytesIO(content), filename=filename, content_type="image/png")
    return make


@pytest.fixture
def make_artist():
    counter = {"n": 0}

    def make(**overrides):
        counter["n"] += 1
        fields = {
            "full_name": f"Artist {counter['n']}",
            "email": f"artist{counter['n']}@example.com",
            "age": 30,
            "city": "Pune",
            "district": "Kothrud",
            "status": "active",
            "arts_uploaded": 0,
            "arts_sold": 0,
        }
        fields.update(overrides)
        artist = Artist(**fields)
        db.session.add(artist)
        db.session.commit()
        return artist
    return make


@pytest.fixture
def add_artwork():
    """Insert an artwork row directly, bypassing the counters."""
    def make(artist, **overrides):
        fields = {
            "artist_id": artist.id,
            "art_name": "Untitled",
            "art_category": "Painting",
            "cost": Decimal("100.00"),
            "art_image": "stored.png",
            "status": "listed",
        }
        fields.update(overrides)
        artwork = Artwork(**fields)
        db.session.add(artwork)
        db.session.commit()
        return artwork
    return make


@pytest.fixture
def artwork_form():
    def make(artist_id, **overrides):
        form = {
            "art_name": "Evening Ghats",
            "artist_id": artist_id,
            "art_category": "Painting",
            "cost": "150.00",
            "art_description": "Oil on canvas",
        }
        form.update(overrides)
        return form
    return make
