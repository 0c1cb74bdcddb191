"""Immersive Reader: parse plain text and e-book archives into books."""

from immersive_reader.config import AppConfig, load_config
from immersive_reader.errors import (
    ArchiveExtractionError,
    BookFileNotFoundError,
    BookReadError,
    ContainerParseError,
    ManifestParseError,
    ParseError,
    UnsupportedFormatError,
)
from immersive_reader.ingestion import BookParser, parse
from immersive_reader.models import Book, Chapter

__all__ = [
    "AppConfig",
    "ArchiveExtractionError",
    "Book",
    "BookFileNotFoundError",
    "BookParser",
    "BookReadError",
    "Chapter",
    "ContainerParseError",
    "ManifestParseError",
    "ParseError",
    "UnsupportedFormatError",
    "load_config",
    "parse",
]
