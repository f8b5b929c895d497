from .admin import Admin
from .artist_application import ArtistApplication
from .artist import Artist
from .artwork import Artwork
from .order import Order
from .contact_message import ContactMessage
from .page_view import PageView



__all__ = ["Admin", "ArtistApplication", "Artist", "Artwork", "Order", "ContactMessage", "PageView"]
