"""Locate the package document through META-INF/container.xml."""

import logging
import re
from pathlib import Path

from immersive_reader.errors import ContainerParseError
from immersive_reader.ingestion.archive import path_within

logger = logging.getLogger(__name__)

CONTAINER_PATH = Path("META-INF") / "container.xml"

FULL_PATH_PATTERN = re.compile(r'full-path="([^"]*)"')


def find_full_path(container_xml: str) -> str | None:
    """Return the first double-quoted ``full-path`` attribute value, if any."""
    match = FULL_PATH_PATTERN.search(container_xml)
    return match.group(1) if match else None


def resolve_package_path(root: Path) -> Path:
    """Find the package document of an extracted e-book.

    Args:
        root: Root of the extracted archive.

    Returns:
        Path to the package document, resolved relative to ``root``. The file
        itself is not checked for existence here.

    Raises:
        ContainerParseError: If container.xml is missing or unreadable, has
            no ``full-path`` attribute, or points outside ``root``.
    """
    container_file = root / CONTAINER_PATH
    try:
        container_xml = container_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read container file: %s", container_file)
        raise ContainerParseError(
            f"Cannot read {CONTAINER_PATH.as_posix()}", container_file
        ) from exc

    full_path = find_full_path(container_xml)
    if full_path is None:
        logger.error("No full-path attribute in %s", container_file)
        raise ContainerParseError(
            f"No full-path attribute in {CONTAINER_PATH.as_posix()}", container_file
        )

    package_path = path_within(root, root, full_path)
    if package_path is None:
        logger.error("full-path points outside the archive: %s", full_path)
        raise ContainerParseError(
            f"full-path points outside the archive: {full_path}", container_file
        )

    logger.debug("Package document resolved to %s", package_path)
    return package_path
