"""
Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status it maps to. Validation and lookup errors
are shown to the caller as-is; storage and persistence failures keep their
detail for the log and answer with a generic message.
"""


class GalleryError(Exception):
    status_code = 400
    public_message = None

    def __init__(self, message=None, detail=None):
        super().__init__(message or self.public_message or self.__class__.__name__)
        self.message = message or self.public_message
        self.detail = detail

    def to_dict(self):
        return {"error": self.public_message or self.message}


class ValidationError(GalleryError):
    status_code = 400


class NotFound(GalleryError):
    status_code = 404


class ArtistNotFound(NotFound):
    # artist id comes from the submitted form, not from the URL
    status_code = 400

    def __init__(self, message="Selected artist not found", detail=None):
        super().__init__(message, detail)


class DuplicateEmail(GalleryError):
    status_code = 400


class DuplicateOrderId(GalleryError):
    status_code = 400

    def __init__(self, message="Order ID already exists", detail=None):
        super().__init__(message, detail)


class InvalidStatus(GalleryError):
    status_code = 400

    def __init__(self, message="Invalid status", detail=None):
        super().__init__(message, detail)


class StorageFailure(GalleryError):
    status_code = 500
    public_message = "Could not store the uploaded file"


class PersistenceFailure(GalleryError):
    status_code = 500
    public_message = "Internal server error"
