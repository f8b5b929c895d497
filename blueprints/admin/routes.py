from flask import Blueprint, jsonify, request, current_app, send_file
from flask_login import login_required, current_user
from services.helpers import clean
from services import applications, artists, artworks, catalog, messages, orders, stats

admin_bp = Blueprint("admin", __name__)


def form_data():
    return request.get_json(silent=True) or request.form


# Only a logged-in admin gets past this point
@admin_bp.before_request
def restrict_to_admin():
    if not current_user.is_authenticated:
        return jsonify({"error": "Authentication required"}), 401

#-------------------------------------------------------
# Dashboard
@admin_bp.route("/dashboard")
@login_required
def dashboard():
    return jsonify(stats.dashboard_stats())


# Excel export of all orders
@admin_bp.route("/dashboard/export_excel")
@login_required
def export_dashboard_excel():
    output, filename = stats.export_orders_excel()
    return send_file(
        output,
        as_attachment=True,
        download_name=filename,
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


@admin_bp.route("/maintenance/reconcile_counts", methods=["POST"])
@login_required
def reconcile_counts():
    fixed = artists.reconcile_artist_counts()
    current_app.logger.info("Counter reconciliation by %s fixed %s artist(s)", current_user.username, fixed)
    return jsonify({"success": f"Reconciled counters, {fixed} artist(s) fixed", "fixed": fixed})

#-------------------------------------------------------
# Artist applications
@admin_bp.route("/applications")
@login_required
def manage_applications():
    items = applications.list_applications(request.args.get("status"))
    return jsonify({"applications": [a.to_dict() for a in items]})


@admin_bp.route("/applications/<int:app_id>")
@login_required
def application_detail(app_id):
    return jsonify(applications.get_application(app_id).to_dict())


@admin_bp.route("/applications/<int:app_id>/status", methods=["POST"])
@login_required
def update_application_status(app_id):
    data = form_data()
    outcome = applications.update_application_status(
        app_id,
        clean(data, "status") or "",
        reviewer=current_user.username,
        rejection_reason=data.get("rejection_reason"),
    )
    return jsonify(outcome.to_dict())


@admin_bp.route("/applications/<int:app_id>/delete", methods=["POST"])
@login_required
def delete_application(app_id):
    return jsonify({"success": applications.delete_application(app_id)})


@admin_bp.route("/export_application/<int:app_id>")
@login_required
def export_application(app_id):
    buffer, filename = applications.export_application_docx(app_id)
    return send_file(
        buffer,
        as_attachment=True,
        download_name=filename,
        mimetype="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    )

#-------------------------------------------------------
# Artists
@admin_bp.route("/artists")
@login_required
def manage_artists():
    page = catalog.list_artists(
        search=request.args.get("search"),
        sort=request.args.get("sort"),
        page=request.args.get("page"),
    )
    return jsonify(page.to_dict())


@admin_bp.route("/artists/create", methods=["POST"])
@login_required
def create_artist():
    artist = artists.create_artist(form_data(), request.files.get("profile_picture"))
    return jsonify({"success": "Artist created successfully", "artist": artist.to_dict()}), 201


@admin_bp.route("/artists/<artist_id>")
@login_required
def artist_detail(artist_id):
    artist = artists.get_artist(artist_id)
    return jsonify(artist.to_dict())


@admin_bp.route("/artists/<artist_id>/edit", methods=["POST"])
@login_required
def edit_artist(artist_id):
    artist = artists.update_artist(artist_id, form_data(), request.files.get("profile_picture"))
    return jsonify({"success": "Artist updated successfully", "artist": artist.to_dict()})


@admin_bp.route("/artists/<artist_id>/delete", methods=["POST"])
@login_required
def delete_artist(artist_id):
    return jsonify({"success": artists.soft_delete_artist(artist_id)})

#-------------------------------------------------------
# Artworks
@admin_bp.route("/artworks")
@login_required
def manage_artworks():
    page = catalog.list_artworks(
        search=request.args.get("search"),
        category=request.args.get("category"),
        sort=request.args.get("sort"),
        page=request.args.get("page"),
        status=request.args.get("status"),
        public=False,
    )
    return jsonify(page.to_dict())


@admin_bp.route("/artworks/artist_choices")
@login_required
def artwork_artist_choices():
    return jsonify({"artists": catalog.artist_choices()})


@admin_bp.route("/artworks/create", methods=["POST"])
@login_required
def create_artwork():
    artwork = artworks.create_artwork(form_data(), request.files.get("art_image"))
    return jsonify({"success": f'Artwork "{artwork.art_name}" created successfully', "artwork": artwork.to_dict()}), 201


@admin_bp.route("/artworks/<artwork_id>")
@login_required
def artwork_detail(artwork_id):
    return jsonify(artworks.get_artwork(artwork_id).to_dict())


@admin_bp.route("/artworks/<artwork_id>/edit", methods=["POST"])
@login_required
def edit_artwork(artwork_id):
    artwork = artworks.update_artwork(artwork_id, form_data(), request.files.get("art_image"))
    return jsonify({"success": f'Artwork "{artwork.art_name}" updated successfully', "artwork": artwork.to_dict()})


@admin_bp.route("/artworks/<artwork_id>/delete", methods=["POST"])
@login_required
def delete_artwork(artwork_id):
    return jsonify({"success": artworks.soft_delete_artwork(artwork_id)})

#-------------------------------------------------------
# Orders
@admin_bp.route("/orders")
@login_required
def manage_orders():
    items = orders.list_orders(request.args.get("status"))
    return jsonify({"orders": [o.to_dict() for o in items]})


@admin_bp.route("/orders/<int:order_pk>")
@login_required
def order_detail(order_pk):
    return jsonify(orders.get_order(order_pk).to_dict())


@admin_bp.route("/orders/<int:order_pk>/status", methods=["POST"])
@login_required
def update_order_status(order_pk):
    status = clean(form_data(), "status") or ""
    return jsonify({"success": orders.update_order_status(order_pk, status)})


@admin_bp.route("/orders/<int:order_pk>/delete", methods=["POST"])
@login_required
def delete_order(order_pk):
    return jsonify({"success": orders.delete_order(order_pk)})

#-------------------------------------------------------
# Contact messages
@admin_bp.route("/messages")
@login_required
def inbox():
    return jsonify({"messages": [m.to_dict() for m in messages.list_messages(archived=False)]})


@admin_bp.route("/messages/archive")
@login_required
def archive():
    return jsonify({"messages": [m.to_dict() for m in messages.list_messages(archived=True)]})


@admin_bp.route("/messages/<int:message_id>")
@login_required
def open_message(message_id):
    return jsonify(messages.open_message(message_id).to_dict())


@admin_bp.route("/messages/<int:message_id>/status", methods=["POST"])
@login_required
def update_message_status(message_id):
    status = clean(form_data(), "status") or ""
    return jsonify({"success": messages.update_message_status(message_id, status)})


@admin_bp.route("/messages/<int:message_id>/delete", methods=["POST"])
@login_required
def delete_message(message_id):
    return jsonify({"success": messages.delete_message(message_id)})
