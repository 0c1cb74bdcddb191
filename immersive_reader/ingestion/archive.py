"""Scoped extraction of zip-based e-book archives."""

import logging
import shutil
import tempfile
import zipfile
from pathlib import Path
from uuid import uuid4

from immersive_reader.errors import ArchiveExtractionError

logger = logging.getLogger(__name__)


class ExtractedArchive:
    """An archive unpacked into its own temporary directory.

    The directory is owned exclusively by this object and is deleted by
    ``release()``. Use it as a context manager so release happens on every
    exit path::

        with extract_archive(path) as archive:
            ...  # archive.root is the extracted tree

    Args:
        root: Directory holding the extracted files.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Recursively delete the extracted tree. Safe to call more than once.

        Raises:
            OSError: If the directory exists but cannot be removed.
        """
        if self._released:
            return
        try:
            shutil.rmtree(self.root)
        except FileNotFoundError:
            pass
        except OSError:
            logger.exception("Failed to remove extraction directory: %s", self.root)
            raise
        self._released = True
        logger.debug("Removed extraction directory %s", self.root)

    def __enter__(self) -> "ExtractedArchive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


def make_extraction_dir(temp_dir: str | Path | None = None, prefix: str = "") -> Path:
    """Create a uniquely named directory for one extraction.

    Args:
        temp_dir: Parent directory; defaults to the process temporary directory.
        prefix: Prefix for the directory name, followed by a random UUID.

    Returns:
        Path to the newly created, empty directory.
    """
    parent = Path(temp_dir) if temp_dir is not None else Path(tempfile.gettempdir())
    target = parent / f"{prefix}{uuid4().hex}"
    target.mkdir(parents=True, exist_ok=False)
    return target


def extract_archive(
    archive_path: Path,
    temp_dir: str | Path | None = None,
    prefix: str = "",
) -> ExtractedArchive:
    """Unpack a zip-compatible archive into a fresh temporary directory.

    Args:
        archive_path: Path to the archive file.
        temp_dir: Parent directory for the extraction directory.
        prefix: Name prefix for the extraction directory.

    Returns:
        An ExtractedArchive that must be released by the caller.

    Raises:
        ArchiveExtractionError: If the archive is missing or corrupt, or the
            extraction directory cannot be created. Nothing is left on disk.
    """
    if not archive_path.is_file():
        raise ArchiveExtractionError(f"Archive not found: {archive_path}", archive_path)

    try:
        target = make_extraction_dir(temp_dir, prefix)
    except OSError as exc:
        logger.error("Cannot create extraction directory under %s", temp_dir)
        raise ArchiveExtractionError(
            f"Cannot create extraction directory for {archive_path}", archive_path
        ) from exc

    archive = ExtractedArchive(target)
    try:
        with zipfile.ZipFile(archive_path) as zf:
            zf.extractall(target)
    except (zipfile.BadZipFile, OSError, RuntimeError, ValueError) as exc:
        logger.error("Failed to extract archive: %s", archive_path)
        archive.release()
        raise ArchiveExtractionError(
            f"Cannot extract archive: {archive_path}", archive_path
        ) from exc
    except BaseException:
        archive.release()
        raise

    logger.debug("Extracted %s into %s", archive_path, target)
    return archive


def path_within(root: Path, base: Path, relative: str) -> Path | None:
    """Join a package-internal path onto ``base`` without leaving ``root``.

    A leading ``/`` means the archive root, not the host filesystem root.

    Args:
        root: Root of the extracted tree.
        base: Directory the path is relative to, inside ``root``.
        relative: Path taken from a package file.

    Returns:
        The joined path, or None if it resolves outside ``root``.
    """
    if relative.startswith("/"):
        candidate = root / relative.lstrip("/")
    else:
        candidate = base / relative
    if not candidate.resolve().is_relative_to(root.resolve()):
        return None
    return candidate
