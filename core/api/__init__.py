# External API clients

from .media_host import MediaStore, StoredMedia, get_media_store

__all__ = [
    "MediaStore",
    "StoredMedia",
    "get_media_store",
]
