from flask import Blueprint, jsonify, request, current_app
from flask_login import login_user, logout_user, login_required, current_user
from extensions import db
from models.admin import Admin
from services.helpers import as_text
from datetime import datetime

auth_bp = Blueprint("auth", __name__)


def _credentials():
    data = request.get_json(silent=True) or request.form
    return as_text(data.get("username")), as_text(data.get("password"))


# Login
@auth_bp.route("/login", methods=["POST"])
def login():
    username, password = _credentials()
    if not username or not password:
        return jsonify({"error": "Username and password are required"}), 400

    admin = Admin.query.filter_by(username=username).first()
    if not admin or not admin.check_password(password):
        current_app.logger.warning("Failed admin login for %s", username)
        return jsonify({"error": "Invalid username or password"}), 401

    login_user(admin)
    admin.last_login = datetime.now()
    db.session.commit()
    return jsonify({"success": "Logged in", "username": admin.username})


# Logout
@auth_bp.route("/logout", methods=["GET", "POST"])
@login_required
def logout():
    logout_user()
    return jsonify({"success": "Logged out"})


@auth_bp.route("/me")
@login_required
def me():
    return jsonify({
        "id": current_user.id,
        "username": current_user.username,
        "last_login": current_user.last_login.isoformat() if current_user.last_login else None,
    })
