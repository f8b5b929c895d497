"""
Everything related to uploaded images on disk.

Files live in one folder per namespace (profiles, artworks, applications);
the database only stores the final file name.
"""

import logging
import os
import shutil
import time

from flask import current_app
from werkzeug.utils import secure_filename

from errors import StorageFailure, ValidationError

logger = logging.getLogger(__name__)

NAMESPACES = {
    "profiles": "UPLOAD_FOLDER_PROFILES",
    "artworks": "UPLOAD_FOLDER_ARTWORKS",
    "applications": "UPLOAD_FOLDER_APPLICATIONS",
}


def folder_for(namespace: str) -> str:
    return current_app.config[NAMESPACES[namespace]]


def allowed_ext(filename: str, allowed: set[str]) -> bool:
    """Return True if filename has an allowed extension."""
    return "." in filename and filename.rsplit(".", 1)[1].lower() in allowed


def has_file(file_storage) -> bool:
    return bool(file_storage and file_storage.filename)


def check_image(file_storage):
    """Reject files whose extension is not an allowed image type."""
    if not allowed_ext(file_storage.filename, current_app.config["ALLOWED_EXTENSIONS"]):
        raise ValidationError("Only image files are allowed!")


def save_upload(file_storage, namespace: str, prefix: str) -> str:
    """
    Save an uploaded file and return the stored file name.

    The name gets a millisecond timestamp so two uploads called 'image.jpg'
    never overwrite each other.
    """
    check_image(file_storage)
    safe = secure_filename(file_storage.filename)
    final = f"{prefix}_{int(time.time() * 1000)}_{safe}"
    base = folder_for(namespace)
    try:
        os.makedirs(base, exist_ok=True)
        file_storage.save(os.path.join(base, final))
    except OSError as exc:
        logger.error("Failed to save upload %s to %s", final, base, exc_info=True)
        raise StorageFailure(detail=str(exc)) from exc
    return final


def file_exists(namespace: str, filename) -> bool:
    if not filename:
        return False
    return os.path.isfile(os.path.join(folder_for(namespace), filename))


def delete_upload(namespace: str, filename) -> bool:
    """Remove a stored file. Missing files are not an error."""
    if not file_exists(namespace, filename):
        return False
    path = os.path.join(folder_for(namespace), filename)
    try:
        os.remove(path)
    except OSError as exc:
        raise StorageFailure(detail=str(exc)) from exc
    return True


def discard_upload(namespace: str, filename):
    """Best-effort delete used for cleanup paths; failures are only logged."""
    try:
        delete_upload(namespace, filename)
    except StorageFailure:
        logger.warning("Could not delete %s/%s", namespace, filename, exc_info=True)


def copy_upload(src_namespace: str, filename: str, dst_namespace: str, prefix: str) -> str:
    """Copy a stored file into another namespace and return the new name."""
    if not file_exists(src_namespace, filename):
        raise StorageFailure(detail=f"{src_namespace}/{filename} does not exist")
    final = f"{prefix}_{int(time.time() * 1000)}_{filename}"
    dst_base = folder_for(dst_namespace)
    try:
        os.makedirs(dst_base, exist_ok=True)
        shutil.copyfile(os.path.join(folder_for(src_namespace), filename), os.path.join(dst_base, final))
    except OSError as exc:
        raise StorageFailure(detail=str(exc)) from exc
    return final
