"""Transient models produced while reading an e-book package document."""

from pathlib import Path

from pydantic import BaseModel, Field


class ManifestItem(BaseModel):
    """Maps a package-internal id to a content file href.

    The href is relative to the directory holding the package document.
    """

    id: str
    href: str


class SpineEntry(BaseModel):
    """A reference into the manifest; spine order is reading order."""

    idref: str


class PackageDocument(BaseModel):
    """Metadata, manifest and spine discovered in a package document."""

    path: Path
    title: str | None = None
    author: str | None = None
    manifest: dict[str, ManifestItem] = Field(default_factory=dict)
    spine: list[SpineEntry] = Field(default_factory=list)

    @property
    def content_dir(self) -> Path:
        """Directory that manifest hrefs are resolved against."""
        return self.path.parent

    def content_hrefs(self) -> list[str]:
        """Return manifest hrefs in spine order.

        Spine entries without a matching manifest id are dropped. Duplicate
        entries are kept, so a content file may appear more than once.
        """
        return [
            self.manifest[entry.idref].href
            for entry in self.spine
            if entry.idref in self.manifest
        ]
