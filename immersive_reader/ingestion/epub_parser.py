"""E-book archive pipeline: extract, locate package document, load chapters."""

import logging
from pathlib import Path

from immersive_reader.config import AppConfig
from immersive_reader.ingestion.archive import extract_archive
from immersive_reader.ingestion.assembly import assemble_book, with_placeholder_chapter
from immersive_reader.ingestion.container import resolve_package_path
from immersive_reader.ingestion.content import load_chapters
from immersive_reader.ingestion.package_document import parse_package_document
from immersive_reader.models.book import Book

logger = logging.getLogger(__name__)


def parse_epub(file_path: Path, config: AppConfig) -> Book:
    """Parse a zip-packaged e-book into a Book.

    The archive is extracted into a temporary directory that is removed
    before this function returns or raises.

    Args:
        file_path: Path to the archive.
        config: Application configuration.

    Returns:
        A Book with chapters in spine order. If no chapter could be loaded the
        book gets a single placeholder chapter instead.

    Raises:
        ArchiveExtractionError: If the archive cannot be extracted.
        ContainerParseError: If the package document cannot be located.
        ManifestParseError: If the package document cannot be read.
    """
    with extract_archive(
        file_path,
        temp_dir=config.storage.temp_dir,
        prefix=config.storage.temp_prefix,
    ) as archive:
        package_path = resolve_package_path(archive.root)
        package = parse_package_document(package_path)
        chapters = load_chapters(
            package.content_dir, package.content_hrefs(), root=archive.root
        )

    book = assemble_book(
        file_path,
        title=package.title,
        author=package.author,
        chapters=chapters,
        file_format="epub",
        config=config.parsing,
    )
    if not book.chapters:
        logger.warning("No readable chapters in %s, using placeholder", file_path)
        book = with_placeholder_chapter(book, config.parsing)
    return book
