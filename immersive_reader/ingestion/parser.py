"""Book file parser: dispatches on file extension to a format parser."""

import logging
from pathlib import Path

from immersive_reader.config import AppConfig
from immersive_reader.errors import BookFileNotFoundError, UnsupportedFormatError
from immersive_reader.ingestion.assembly import placeholder_book
from immersive_reader.ingestion.epub_parser import parse_epub
from immersive_reader.ingestion.text_parser import parse_plain_text
from immersive_reader.models.book import Book

logger = logging.getLogger(__name__)

# Format identifiers produced by detect_format
TXT_FORMAT = "txt"
EPUB_FORMAT = "epub"

# Extensions recognized with the default configuration
SUPPORTED_FORMATS: dict[str, str] = {
    ".txt": TXT_FORMAT,
    ".epub": EPUB_FORMAT,
}


class BookParser:
    """Parses book files into an immutable Book.

    Plain text and zip-packaged e-books are parsed; any other extension
    yields a single-chapter placeholder book, or UnsupportedFormatError when
    placeholders are disabled. The parser keeps no state between calls, so
    one instance may be shared across threads.

    Args:
        config: Application configuration. Defaults are used when omitted.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or AppConfig()

    @property
    def supported_formats(self) -> dict[str, str]:
        """Map of lowercase extension to format identifier."""
        parsing = self._config.parsing
        formats = {ext.lower(): TXT_FORMAT for ext in parsing.text_extensions}
        formats.update({ext.lower(): EPUB_FORMAT for ext in parsing.archive_extensions})
        return formats

    def parse(self, file_path: str | Path) -> Book:
        """Parse a book file into a Book.

        Args:
            file_path: Path to the book file.

        Returns:
            A Book with at least one chapter.

        Raises:
            BookFileNotFoundError: If file_path does not exist.
            BookReadError: If a text file cannot be read or decoded.
            UnsupportedFormatError: If the extension is not recognized and
                placeholders are disabled.
            ArchiveExtractionError: If an e-book archive cannot be extracted.
            ContainerParseError: If the package document cannot be located.
            ManifestParseError: If the package document cannot be read.
        """
        path = Path(file_path)
        if not path.exists():
            logger.error("File not found: %s", path)
            raise BookFileNotFoundError(f"File not found: {path}", path)

        file_format = self.detect_format(path)

        if file_format == TXT_FORMAT:
            book = parse_plain_text(path, self._config.parsing)
        elif file_format == EPUB_FORMAT:
            book = parse_epub(path, self._config)
        elif self._config.parsing.allow_placeholder:
            logger.warning(
                "Unsupported format '%s', using placeholder: %s", path.suffix, path
            )
            book = placeholder_book(path, self._config.parsing)
        else:
            raise UnsupportedFormatError(
                f"Unsupported file format: '{path.suffix.lower()}'. "
                f"Supported: {', '.join(self.supported_formats)}",
                path,
            )

        logger.info(
            "Parsed %s (%s): %d chapters",
            path.name,
            book.file_format,
            len(book.chapters),
        )
        return book

    def detect_format(self, file_path: Path) -> str | None:
        """Determine file format from extension, case-insensitively.

        Args:
            file_path: Path to the file.

        Returns:
            "txt", "epub", or None for unrecognized extensions.
        """
        return self.supported_formats.get(file_path.suffix.lower())


def parse(file_path: str | Path, config: AppConfig | None = None) -> Book:
    """Parse a book file with a one-off BookParser."""
    return BookParser(config).parse(file_path)
