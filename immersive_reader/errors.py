"""Error types raised by the book parsing pipeline."""

from pathlib import Path


class ParseError(Exception):
    """Base class for every structural failure while parsing a book file.

    Args:
        message: Human-readable description of the failure.
        path: The file or directory the failure relates to.
    """

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class BookFileNotFoundError(ParseError, FileNotFoundError):
    """The input path does not exist."""


class BookReadError(ParseError):
    """The file exists but could not be read or decoded."""

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        detected_encoding: str | None = None,
    ) -> None:
        super().__init__(message, path)
        self.detected_encoding = detected_encoding


class UnsupportedFormatError(ParseError):
    """The extension is not recognized and placeholders are disabled."""


class ArchiveExtractionError(ParseError):
    """The archive is missing or corrupt, or could not be extracted."""


class ContainerParseError(ParseError):
    """META-INF/container.xml is missing, unreadable, or has no full-path."""


class ManifestParseError(ParseError):
    """The package document could not be opened or read."""
