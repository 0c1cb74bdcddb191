"""Shared fixtures for building e-book archives on disk."""

import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

CONTAINER_XML = (
    '<?xml version="1.0"?>\n'
    '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">\n'
    "  <rootfiles>\n"
    '    <rootfile full-path="OEBPS/content.opf" '
    'media-type="application/oebps-package+xml"/>\n'
    "  </rootfiles>\n"
    "</container>\n"
)


def build_opf(
    items: list[tuple[str, str]],
    spine: list[str],
    title: str | None = "Sample Book",
    author: str | None = "Sample Author",
) -> str:
    """Render a minimal package document."""
    metadata = []
    if title is not None:
        metadata.append(f"    <dc:title>{title}</dc:title>")
    if author is not None:
        metadata.append(f'    <dc:creator opf:role="aut">{author}</dc:creator>')
    manifest = [
        f'    <item id="{item_id}" href="{href}" media-type="application/xhtml+xml"/>'
        for item_id, href in items
    ]
    itemrefs = [f'    <itemref idref="{idref}"/>' for idref in spine]
    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<package xmlns="http://www.idpf.org/2007/opf" version="2.0">',
            '  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">',
            *metadata,
            "  </metadata>",
            "  <manifest>",
            *manifest,
            "  </manifest>",
            '  <spine toc="ncx">',
            *itemrefs,
            "  </spine>",
            "</package>",
        ]
    )


def chapter_html(title: str, body: str) -> str:
    return (
        "<html><head><title>"
        f"{title}</title></head><body><p>{body}</p></body></html>"
    )


@pytest.fixture
def make_epub(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a zip archive from a mapping of member name to text.

    ``container`` and ``opf`` default to a valid pointer file and an empty
    package document; pass None to leave either out of the archive.
    """

    def _make(
        name: str = "book.epub",
        files: dict[str, str] | None = None,
        container: str | None = CONTAINER_XML,
        opf: str | None = "",
    ) -> Path:
        path = tmp_path / name
        members: dict[str, str] = {}
        if container is not None:
            members["META-INF/container.xml"] = container
        if opf is not None:
            members["OEBPS/content.opf"] = opf or build_opf([], [])
        members.update(files or {})
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("mimetype", "application/epub+zip")
            for member, text in members.items():
                zf.writestr(member, text)
        return path

    return _make


@pytest.fixture
def extract_root(tmp_path: Path) -> Path:
    """Directory used as the parent of extraction directories."""
    return tmp_path / "extract"
