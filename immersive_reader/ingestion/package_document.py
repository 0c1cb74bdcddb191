"""Package document (OPF) parser.

Metadata, manifest and spine are found by pattern matching over the raw
document rather than by XML validation, so malformed or namespaced documents
still yield whatever entries can be recognized.
"""

import logging
import re
from collections.abc import Iterator
from pathlib import Path

from immersive_reader.errors import ManifestParseError
from immersive_reader.models.package import ManifestItem, PackageDocument, SpineEntry

logger = logging.getLogger(__name__)

TITLE_PATTERN = re.compile(r"<dc:title>(.*?)</dc:title>", re.DOTALL)
CREATOR_PATTERN = re.compile(r"<dc:creator[^>]*>(.*?)</dc:creator>", re.DOTALL)

# Opening or self-closing tags; closing tags, comments and declarations are skipped
TAG_PATTERN = re.compile(r"<([A-Za-z_][\w:.\-]*)((?:\s[^>]*)?)/?>")
ATTRIBUTE_PATTERN = re.compile(r'([\w:.\-]+)\s*=\s*"([^"]*)"')


def _first_value(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if match is None:
        return None
    value = match.group(1).strip()
    return value or None


def extract_title(opf: str) -> str | None:
    """Return the trimmed text of the first ``<dc:title>`` element, if any."""
    return _first_value(TITLE_PATTERN, opf)


def extract_author(opf: str) -> str | None:
    """Return the trimmed text of the first ``<dc:creator>`` element, if any.

    Attributes on the opening tag (``opf:role`` and the like) are ignored.
    """
    return _first_value(CREATOR_PATTERN, opf)


def iter_tag_attributes(text: str) -> Iterator[dict[str, str]]:
    """Yield the attribute dict of every opening tag, in document order."""
    for match in TAG_PATTERN.finditer(text):
        yield dict(ATTRIBUTE_PATTERN.findall(match.group(2)))


def parse_manifest_and_spine(
    opf: str,
) -> tuple[dict[str, ManifestItem], list[SpineEntry]]:
    """Collect manifest items and spine entries from a package document.

    Any element carrying both ``id`` and ``href`` is a manifest item; a later
    duplicate id replaces the earlier one. Any element carrying ``idref`` is a
    spine entry, kept in document order with duplicates.

    Args:
        opf: Raw package document text.

    Returns:
        A (manifest, spine) tuple.
    """
    manifest: dict[str, ManifestItem] = {}
    spine: list[SpineEntry] = []

    for attributes in iter_tag_attributes(opf):
        if "id" in attributes and "href" in attributes:
            item_id = attributes["id"]
            manifest[item_id] = ManifestItem(id=item_id, href=attributes["href"])
        if "idref" in attributes:
            spine.append(SpineEntry(idref=attributes["idref"]))

    return manifest, spine


def parse_package_document(package_path: Path) -> PackageDocument:
    """Read a package document and extract metadata, manifest and spine.

    Args:
        package_path: Path to the package document.

    Returns:
        A PackageDocument. An empty manifest or spine is not an error.

    Raises:
        ManifestParseError: If the document cannot be opened or decoded.
    """
    try:
        opf = package_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read package document: %s", package_path)
        raise ManifestParseError(
            f"Cannot read package document: {package_path}", package_path
        ) from exc

    manifest, spine = parse_manifest_and_spine(opf)
    document = PackageDocument(
        path=package_path,
        title=extract_title(opf),
        author=extract_author(opf),
        manifest=manifest,
        spine=spine,
    )

    dropped = [entry.idref for entry in spine if entry.idref not in manifest]
    if dropped:
        logger.warning(
            "Dropped %d spine entries with no manifest item: %s",
            len(dropped),
            ", ".join(dropped),
        )
    logger.debug(
        "Package document %s: %d manifest items, %d spine entries",
        package_path,
        len(manifest),
        len(spine),
    )
    return document
