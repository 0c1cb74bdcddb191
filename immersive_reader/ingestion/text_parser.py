"""Plain text book parser.

The first line of the file is taken as the title, the second as the author,
and everything after that becomes a single chapter.
"""

import logging
import re
from pathlib import Path

import chardet

from immersive_reader.config import ParsingConfig
from immersive_reader.errors import BookReadError
from immersive_reader.ingestion.assembly import (
    assemble_book,
    title_from_filename,
    wrap_markup,
)
from immersive_reader.models.book import Book, Chapter

logger = logging.getLogger(__name__)

# Universal newlines: \r\n, \r and \n each end a line
NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")

CHAPTER_TITLE = "Chapter 1"


def read_text(file_path: Path) -> str:
    """Read a file as UTF-8 text.

    A leading byte-order mark is dropped. When decoding fails, chardet is
    asked for a best guess so the error can tell the caller what the file
    looks like.

    Args:
        file_path: Path to the text file.

    Returns:
        The decoded file content.

    Raises:
        BookReadError: If the file cannot be read or is not valid UTF-8.
    """
    try:
        raw_bytes = file_path.read_bytes()
    except OSError as exc:
        logger.error("Failed to read text file: %s", file_path)
        raise BookReadError(f"Cannot read file: {file_path}", file_path) from exc

    try:
        return raw_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        detected = chardet.detect(raw_bytes).get("encoding")
        logger.error(
            "File is not valid UTF-8: %s (detected encoding: %s)", file_path, detected
        )
        raise BookReadError(
            f"File is not valid UTF-8: {file_path}",
            file_path,
            detected_encoding=detected,
        ) from exc


def split_lines(text: str) -> list[str]:
    """Split text on universal newlines.

    An empty string yields a single empty line and a trailing newline yields a
    trailing empty line, so joining the result with ``"\\n"`` restores the text
    with normalized line endings.
    """
    return NEWLINE_PATTERN.split(text)


def parse_plain_text(file_path: Path, config: ParsingConfig) -> Book:
    """Parse a plain text file into a single-chapter Book.

    Args:
        file_path: Path to the text file.
        config: Parsing configuration holding the fallback values.

    Returns:
        A Book whose only chapter is titled "Chapter 1".

    Raises:
        BookReadError: If the file cannot be read or decoded.
    """
    lines = split_lines(read_text(file_path))

    # Lines are kept verbatim; only an empty title needs the filename
    title = lines[0] or title_from_filename(file_path)
    author = lines[1] if len(lines) > 1 else None
    body = "\n".join(lines[2:])

    chapter = Chapter(
        title=CHAPTER_TITLE,
        plain_text=body,
        markup=wrap_markup(title, body),
    )
    logger.debug("Read plain text book %s (%d lines)", file_path, len(lines))
    return assemble_book(
        file_path,
        title=title,
        author=author,
        chapters=[chapter],
        file_format="txt",
        config=config,
    )
