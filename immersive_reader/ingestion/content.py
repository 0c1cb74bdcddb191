"""Load chapter content files and derive titles and plain text."""

import logging
import re
from pathlib import Path
from urllib.parse import unquote

from immersive_reader.ingestion.archive import path_within
from immersive_reader.models.book import Chapter

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"<[^>]+>")
TITLE_ELEMENT_PATTERN = re.compile(r"<title(?:\s[^>]*)?>.*?</title>", re.DOTALL)
TITLE_PATTERN = re.compile(r"<title>(.*?)</title>", re.DOTALL)
H1_PATTERN = re.compile(r"<h1(?:\s[^>]*)?>(.*?)</h1>", re.DOTALL)

# Only these four entities are decoded; &amp; goes last so it is never decoded twice
ENTITY_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)


def remove_tags(markup: str) -> str:
    """Delete every ``<...>`` tag, repeating until the pattern no longer matches."""
    text = markup
    while True:
        stripped = TAG_PATTERN.sub("", text)
        if stripped == text:
            return stripped
        text = stripped


def decode_entities(text: str) -> str:
    for entity, replacement in ENTITY_REPLACEMENTS:
        text = text.replace(entity, replacement)
    return text


def strip_markup(markup: str) -> str:
    """Convert markup to plain text.

    The ``<title>`` element is dropped with its text, which is document
    metadata and surfaces as the chapter title instead. All other tags are
    removed and the four entities ``&nbsp;``, ``&lt;``, ``&gt;`` and ``&amp;``
    are decoded. Other entities are left as they are, and the text inside
    script or style elements is kept like any other text.
    """
    return decode_entities(remove_tags(TITLE_ELEMENT_PATTERN.sub("", markup)))


def _clean_title(raw: str) -> str | None:
    title = strip_markup(raw).strip()
    return title or None


def extract_chapter_title(markup: str) -> str | None:
    """Find a chapter title in ``<title>``, falling back to the first ``<h1>``.

    Args:
        markup: Raw content file markup.

    Returns:
        The title with inner tags stripped and whitespace trimmed, or None if
        neither element yields any text.
    """
    for pattern in (TITLE_PATTERN, H1_PATTERN):
        match = pattern.search(markup)
        if match is not None:
            title = _clean_title(match.group(1))
            if title:
                return title
    return None


def resolve_href(
    content_dir: Path, href: str, root: Path | None = None
) -> Path | None:
    """Resolve a manifest href to an existing file inside the archive.

    A ``#fragment`` is ignored. An href that does not exist verbatim is
    retried percent-decoded. A leading ``/`` is taken relative to ``root``.

    Args:
        content_dir: Directory the href is relative to.
        href: Href from the manifest.
        root: Root of the extracted tree; defaults to ``content_dir``.

    Returns:
        The file path, or None if nothing exists at the href or it points
        outside ``root``.
    """
    root = root if root is not None else content_dir
    relative = href.split("#", 1)[0]
    if not relative:
        return None

    for candidate_href in dict.fromkeys((relative, unquote(relative))):
        candidate = path_within(root, content_dir, candidate_href)
        if candidate is None:
            logger.warning("Skipping href outside the archive: %s", href)
            return None
        if candidate.is_file():
            return candidate
    return None


def read_content_file(path: Path) -> str | None:
    """Read a content file as UTF-8, returning None if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.warning("Skipping unreadable content file: %s", path, exc_info=True)
        return None


def build_chapter(markup: str, position: int) -> Chapter:
    """Build a chapter from content markup.

    Args:
        markup: Raw content file markup, kept verbatim on the chapter.
        position: 1-based position used for the "Chapter N" fallback title.
    """
    title = extract_chapter_title(markup) or f"Chapter {position}"
    return Chapter(title=title, plain_text=strip_markup(markup), markup=markup)


def load_chapters(
    content_dir: Path, hrefs: list[str], root: Path | None = None
) -> list[Chapter]:
    """Load chapters for hrefs given in reading order.

    Hrefs that do not resolve to a readable file are skipped, so the
    "Chapter N" fallback numbers count only chapters actually produced.

    Args:
        content_dir: Directory the hrefs are relative to.
        hrefs: Content file hrefs in spine order; duplicates are allowed.
        root: Root of the extracted tree. Hrefs resolving outside it are
            skipped. Defaults to ``content_dir``.

    Returns:
        Chapters in the order of ``hrefs``.
    """
    chapters: list[Chapter] = []
    for href in hrefs:
        path = resolve_href(content_dir, href, root)
        if path is None:
            logger.warning("Skipping missing content file: %s", href)
            continue

        markup = read_content_file(path)
        if markup is None:
            continue

        chapters.append(build_chapter(markup, len(chapters) + 1))

    return chapters
