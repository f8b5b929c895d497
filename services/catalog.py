"""
Read side of the gallery: artwork and artist listings with search, category
filter, sorting and page-based pagination.
"""

from dataclasses import dataclass, field
from math import ceil

from flask import current_app
from sqlalchemy import case, or_

from errors import InvalidStatus, NotFound
from extensions import db
from models import Artist, Artwork

DEFAULT_PAGE_SIZE = 20

SORT_ALIASES = {
    "date_newest": "newest",
    "date_oldest": "oldest",
    "price_low_high": "price_asc",
    "price_high_low": "price_desc",
}


@dataclass
class Page:
    items: list = field(default_factory=list)
    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE
    total: int = 0

    @property
    def total_pages(self):
        return ceil(self.total / self.per_page) if self.total else 0

    @property
    def has_more(self):
        return self.page * self.per_page < self.total

    def to_dict(self, serialize=None):
        serialize = serialize or (lambda obj: obj.to_dict())
        return {
            "items": [serialize(item) for item in self.items],
            "page": self.page,
            "per_page": self.per_page,
            "total": self.total,
            "total_pages": self.total_pages,
            "has_more": self.has_more,
        }


def parse_page(value):
    """Anything that is not a whole number >= 1 means the first page."""
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def page_size():
    return current_app.config.get("CATALOG_PAGE_SIZE", DEFAULT_PAGE_SIZE)


def _paginate(query, page):
    page = parse_page(page)
    per_page = page_size()
    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return Page(items=items, page=page, per_page=per_page, total=total)


def _search_term(search):
    return (search or "").strip()


def _escape_like(term):
    """Make % and _ in user input match literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _artwork_order(sort, term):
    sort = SORT_ALIASES.get(sort, sort)
    newest = (Artwork.uploaded_at.desc(), Artwork.id.desc())

    if term and sort in (None, "", "relevance"):
        lowered = _escape_like(term.lower())
        name = db.func.lower(Artwork.art_name)
        rank = case(
            (name.like(f"{lowered}%", escape="\\"), 0),
            (name.like(f"%{lowered}%", escape="\\"), 1),
            (db.func.lower(Artist.full_name).like(f"%{lowered}%", escape="\\"), 2),
            else_=3,
        )
        return (rank,) + newest

    orders = {
        "oldest": (Artwork.uploaded_at.asc(), Artwork.id.asc()),
        "price_asc": (Artwork.cost.asc(), Artwork.id.asc()),
        "price_desc": (Artwork.cost.desc(), Artwork.id.desc()),
        "name_asc": (Artwork.art_name.asc(), Artwork.id.asc()),
        "name_desc": (Artwork.art_name.desc(), Artwork.id.desc()),
    }
    return orders.get(sort, newest)


def artworks_query(search=None, category=None, sort=None, status=None, public=True):
    query = Artwork.query.join(Artist, Artwork.artist_id == Artist.id)

    if public:
        query = query.filter(Artwork.status == "listed", Artist.status == "active")
    elif status:
        if status not in Artwork.STATUSES:
            raise InvalidStatus()
        query = query.filter(Artwork.status == status)
    else:
        query = query.filter(Artwork.status != "deleted")

    term = _search_term(search)
    if term:
        pattern = f"%{_escape_like(term)}%"
        query = query.filter(
            or_(
                Artwork.art_name.ilike(pattern, escape="\\"),
                Artwork.art_description.ilike(pattern, escape="\\"),
                Artwork.art_category.ilike(pattern, escape="\\"),
                Artist.full_name.ilike(pattern, escape="\\"),
            )
        )

    category = (category or "").strip()
    if category and category.lower() != "all":
        query = query.filter(Artwork.art_category == category)

    return query.order_by(*_artwork_order(sort, term))


def list_artworks(search=None, category=None, sort=None, page=None, status=None, public=True):
    return _paginate(artworks_query(search, category, sort, status, public), page)


def list_artists(search=None, sort=None, page=None):
    query = Artist.query.filter(Artist.status != "deleted")

    term = _search_term(search)
    if term:
        pattern = f"%{_escape_like(term)}%"
        fields = (Artist.full_name, Artist.email, Artist.city, Artist.district)
        query = query.filter(or_(*[col.ilike(pattern, escape="\\") for col in fields]))

    orders = {
        "oldest": (Artist.joined_at.asc(), Artist.id.asc()),
        "name_asc": (Artist.full_name.asc(), Artist.id.asc()),
        "name_desc": (Artist.full_name.desc(), Artist.id.desc()),
    }
    sort = SORT_ALIASES.get(sort, sort)
    query = query.order_by(*orders.get(sort, (Artist.joined_at.desc(), Artist.id.desc())))
    return _paginate(query, page)


def list_categories():
    rows = (
        db.session.query(Artwork.art_category)
        .filter(Artwork.status == "listed", Artwork.art_category.isnot(None), Artwork.art_category != "")
        .distinct()
        .order_by(Artwork.art_category.asc())
        .all()
    )
    return [row[0] for row in rows]


def artist_choices():
    artists = (
        Artist.query.filter(Artist.status == "active")
        .order_by(Artist.full_name.asc())
        .all()
    )
    return [{"id": a.id, "full_name": a.full_name} for a in artists]


def latest_artworks(limit=20):
    return artworks_query().limit(limit).all()


def public_artist_detail(artist_id):
    artist = db.session.get(Artist, artist_id) if artist_id else None
    if artist is None or artist.status != "active":
        raise NotFound("Artist not found")

    artworks = (
        Artwork.query.filter(Artwork.artist_id == artist.id, Artwork.status == "listed")
        .order_by(Artwork.uploaded_at.desc(), Artwork.id.desc())
        .all()
    )
    return {
        "artist": artist,
        "artworks": artworks,
        "stats": {"artworks": len(artworks), "sold": artist.arts_sold},
    }


def public_artwork_detail(artwork_id, related_limit=4):
    artwork = db.session.get(Artwork, artwork_id) if artwork_id else None
    if (
        artwork is None
        or artwork.status == "deleted"
        or artwork.artist is None
        or artwork.artist.status != "active"
    ):
        raise NotFound("Artwork not found")

    related = (
        Artwork.query.filter(
            Artwork.artist_id == artwork.artist_id,
            Artwork.id != artwork.id,
            Artwork.status == "listed",
        )
        .order_by(Artwork.uploaded_at.desc(), Artwork.id.desc())
        .limit(related_limit)
        .all()
    )
    return {"artwork": artwork, "related": related}
