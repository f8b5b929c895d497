from flask import Blueprint, jsonify, request
from services import applications, catalog, messages, orders, stats
from services.page_views import record_page_view

client_bp = Blueprint("client", __name__)


def form_data():
    return request.get_json(silent=True) or request.form


def artwork_card(artwork):
    return {
        "id": artwork.id,
        "art_name": artwork.art_name,
        "art_category": artwork.art_category,
        "cost": float(artwork.cost),
        "art_image": artwork.art_image,
        "artist_id": artwork.artist_id,
        "artist_name": artwork.artist.full_name if artwork.artist else None,
        "uploaded_at": artwork.uploaded_at.isoformat() if artwork.uploaded_at else None,
    }


def artist_card(artist):
    return {
        "id": artist.id,
        "full_name": artist.full_name,
        "city": artist.city,
        "district": artist.district,
        "bio": artist.bio,
        "profile_picture": artist.profile_picture,
        "socials": artist.socials or {},
        "arts_uploaded": artist.arts_uploaded,
        "arts_sold": artist.arts_sold,
    }


def artworks_from_args():
    return catalog.list_artworks(
        search=request.args.get("search"),
        category=request.args.get("category"),
        sort=request.args.get("sort"),
        page=request.args.get("page"),
    )

#-------------------------------------------------------
# Pages
@client_bp.route("/")
def home():
    record_page_view()
    return jsonify({
        "stats": stats.site_stats(),
        "latest_artworks": [artwork_card(a) for a in catalog.latest_artworks()],
    })


@client_bp.route("/artists")
def artists():
    record_page_view()
    page = catalog.list_artists(
        search=request.args.get("search"),
        sort=request.args.get("sort"),
        page=request.args.get("page"),
    )
    return jsonify(page.to_dict(artist_card))


@client_bp.route("/artists/<artist_id>")
def artist_detail(artist_id):
    record_page_view()
    detail = catalog.public_artist_detail(artist_id)
    return jsonify({
        "artist": artist_card(detail["artist"]),
        "artworks": [artwork_card(a) for a in detail["artworks"]],
        "stats": detail["stats"],
    })


@client_bp.route("/arts")
def arts():
    record_page_view()
    data = artworks_from_args().to_dict(artwork_card)
    data["categories"] = catalog.list_categories()
    return jsonify(data)


@client_bp.route("/arts/<artwork_id>")
def art_detail(artwork_id):
    record_page_view()
    detail = catalog.public_artwork_detail(artwork_id)
    artwork = detail["artwork"]
    return jsonify({
        "artwork": artwork.to_dict(),
        "artist": artist_card(artwork.artist),
        "related": [artwork_card(a) for a in detail["related"]],
    })

#-------------------------------------------------------
# JSON APIs used by the gallery pages
@client_bp.route("/api/categories")
def categories():
    return jsonify({"categories": catalog.list_categories()})


@client_bp.route("/api/search")
def search():
    return jsonify(artworks_from_args().to_dict(artwork_card))


@client_bp.route("/api/load-more")
def load_more():
    page = artworks_from_args()
    return jsonify({
        "artworks": [artwork_card(a) for a in page.items],
        "page": page.page,
        "has_more": page.has_more,
    })

#-------------------------------------------------------
# Forms
@client_bp.route("/apply", methods=["POST"])
def apply():
    application = applications.submit_application(form_data(), request.files.get("profile_picture"))
    return jsonify({
        "success": "Your application has been submitted. We will contact you soon.",
        "application_id": application.id,
    }), 201


@client_bp.route("/contact", methods=["POST"])
def contact():
    messages.submit_message(form_data())
    return jsonify({"success": "Thank you! Your message has been sent."}), 201


@client_bp.route("/order", methods=["POST"])
def place_order():
    data = form_data()
    order = orders.create_order(data, order_id=data.get("order_id"))
    return jsonify({
        "success": "Order placed successfully",
        "order_id": order.order_id,
        "total_amount": float(order.total_amount),
        "item_count": order.item_count,
    }), 201


@client_bp.route("/track-order", methods=["POST"])
def track_order():
    data = form_data()
    order = orders.track_order(data.get("order_id"), data.get("email"))
    return jsonify({"order": order.to_dict()})


@client_bp.route("/api/order-status/<order_id>")
def order_status(order_id):
    return jsonify(orders.get_order_status(order_id))
