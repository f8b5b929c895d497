from flask import Flask, jsonify
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import RequestEntityTooLarge
import logging
import os
from extensions import db, login_manager, migrate
from errors import GalleryError

# Setup Flask
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def create_app(test_config=None):
    app = Flask(__name__)
    app.config['SECRET_KEY'] = os.getenv("SECRET_KEY", "secret_key")
    app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv("DATABASE_URL", "sqlite:///gallery.db")
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Upload folders: artist photos, artwork images, application photos
    uploads = os.path.join(BASE_DIR, "static", "uploads")
    app.config["UPLOAD_FOLDER_PROFILES"] = os.path.join(uploads, "profiles")
    app.config["UPLOAD_FOLDER_ARTWORKS"] = os.path.join(uploads, "artworks")
    app.config["UPLOAD_FOLDER_APPLICATIONS"] = os.path.join(uploads, "applications")
    app.config["ALLOWED_EXTENSIONS"] = {"png", "jpg", "jpeg", "gif", "webp"}
    app.config["MAX_CONTENT_LENGTH"] = 10 * 1024 * 1024  # 10MB/request

    app.config["ORDER_ID_PREFIX"] = os.getenv("ORDER_ID_PREFIX", "CHT")
    app.config["CATALOG_PAGE_SIZE"] = int(os.getenv("CATALOG_PAGE_SIZE", "20"))

    if test_config:
        app.config.update(test_config)

    for key in ("UPLOAD_FOLDER_PROFILES", "UPLOAD_FOLDER_ARTWORKS", "UPLOAD_FOLDER_APPLICATIONS"):
        os.makedirs(app.config[key], exist_ok=True)

    # db, migrate, login manager
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # Import models after db init
    from models import Admin

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Admin, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Authentication required"}), 401

    # Blueprints
    from blueprints.auth.routes import auth_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")

    from blueprints.admin.routes import admin_bp
    app.register_blueprint(admin_bp, url_prefix="/admin")

    from blueprints.client.routes import client_bp
    app.register_blueprint(client_bp)

    register_error_handlers(app)
    return app


def register_error_handlers(app):
    @app.errorhandler(GalleryError)
    def handle_gallery_error(exc):
        db.session.rollback()
        if exc.status_code >= 500:
            app.logger.error("%s: %s", exc.__class__.__name__, exc.detail or exc)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(exc):
        db.session.rollback()
        app.logger.error("Unhandled database error", exc_info=exc)
        return jsonify({"error": "Internal server error"}), 500

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(exc):
        limit_mb = app.config["MAX_CONTENT_LENGTH"] // (1024 * 1024)
        return jsonify({"error": f"Upload is too large (max {limit_mb}MB)"}), 413


app = create_app()

if __name__ == "__main__":
    app.run(debug=True)
