"""Book assembly: fallbacks and placeholder books."""

import html
from pathlib import Path

from immersive_reader.config import ParsingConfig
from immersive_reader.models.book import Book, Chapter


def title_from_filename(file_path: Path) -> str:
    """Derive a readable title from a file name.

    Args:
        file_path: Path to the source file.

    Returns:
        The file name without extension, underscores replaced with spaces.
    """
    return file_path.stem.replace("_", " ")


def wrap_markup(heading: str, body: str) -> str:
    """Build a minimal HTML document with a heading and paragraphs.

    Double newlines in ``body`` become paragraph boundaries.
    """
    heading_html = html.escape(heading, quote=False)
    body_html = html.escape(body, quote=False).replace("\n\n", "</p><p>")
    return f"<html><body><h1>{heading_html}</h1><p>{body_html}</p></body></html>"


def assemble_book(
    file_path: Path,
    title: str | None,
    author: str | None,
    chapters: list[Chapter],
    file_format: str,
    config: ParsingConfig,
) -> Book:
    """Combine parser output into a Book, applying title and author fallbacks.

    Args:
        file_path: Path to the source file, used for the title fallback.
        title: Title found by the parser, or None.
        author: Author found by the parser, or None. An empty string is kept.
        chapters: Chapters in reading order; may be empty.
        file_format: Format identifier recorded on the book.
        config: Parsing configuration holding the fallback values.

    Returns:
        The assembled Book. Chapters are passed through unchanged.
    """
    return Book(
        title=title or title_from_filename(file_path),
        author=author if author is not None else config.unknown_author,
        chapters=tuple(chapters),
        source_path=str(file_path),
        file_format=file_format,
    )


def placeholder_book(file_path: Path, config: ParsingConfig) -> Book:
    """Build the single-chapter preview book used for unsupported formats."""
    name = file_path.stem
    message = config.unsupported_message
    chapter = Chapter(
        title=config.placeholder_chapter_title,
        plain_text=message,
        markup=wrap_markup(name, message),
    )
    return Book(
        title=name,
        author=config.unknown_author,
        chapters=(chapter,),
        source_path=str(file_path),
        file_format="unsupported",
        is_placeholder=True,
    )


def with_placeholder_chapter(book: Book, config: ParsingConfig) -> Book:
    """Give a book with no chapters a single preview chapter.

    Books that already have chapters are returned as-is.
    """
    if book.chapters:
        return book

    message = config.empty_book_message
    chapter = Chapter(
        title=config.placeholder_chapter_title,
        plain_text=message,
        markup=wrap_markup(book.title, message),
    )
    return book.model_copy(update={"chapters": (chapter,), "is_placeholder": True})
