"""Data models for the Immersive Reader parsing core."""

from immersive_reader.models.book import Book, Chapter
from immersive_reader.models.package import ManifestItem, PackageDocument, SpineEntry

__all__ = [
    "Book",
    "Chapter",
    "ManifestItem",
    "PackageDocument",
    "SpineEntry",
]
