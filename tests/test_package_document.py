"""Tests for the package document parser."""

import logging
from pathlib import Path

import pytest

from conftest import build_opf
from immersive_reader.errors import ManifestParseError
from immersive_reader.ingestion.package_document import (
    extract_author,
    extract_title,
    parse_manifest_and_spine,
    parse_package_document,
)


def write_opf(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "OEBPS" / "content.opf"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestMetadata:
    def test_title_and_author(self) -> None:
        opf = build_opf([], [], title="Moby Dick", author="Herman Melville")
        assert extract_title(opf) == "Moby Dick"
        assert extract_author(opf) == "Herman Melville"

    def test_creator_attributes_ignored(self) -> None:
        opf = (
            '<dc:creator opf:role="aut" opf:file-as="Austen, Jane">'
            "Jane Austen</dc:creator>"
        )
        assert extract_author(opf) == "Jane Austen"

    def test_first_value_wins(self) -> None:
        opf = "<dc:title>First</dc:title><dc:title>Second</dc:title>"
        assert extract_title(opf) == "First"

    def test_whitespace_trimmed(self) -> None:
        assert extract_title("<dc:title>\n   Spaced Out\n</dc:title>") == "Spaced Out"

    def test_missing_metadata(self) -> None:
        opf = build_opf([], [], title=None, author=None)
        assert extract_title(opf) is None
        assert extract_author(opf) is None

    def test_empty_title_is_absent(self) -> None:
        assert extract_title("<dc:title>  </dc:title>") is None


class TestManifestAndSpine:
    def test_manifest_maps_ids_to_hrefs(self) -> None:
        opf = build_opf([("c1", "ch1.html"), ("c2", "text/ch2.html")], [])
        manifest, _ = parse_manifest_and_spine(opf)

        assert {k: v.href for k, v in manifest.items()} == {
            "c1": "ch1.html",
            "c2": "text/ch2.html",
        }

    def test_attribute_order_does_not_matter(self) -> None:
        manifest, _ = parse_manifest_and_spine('<item href="a.html" id="a"/>')
        assert manifest["a"].href == "a.html"

    def test_duplicate_id_last_wins(self) -> None:
        opf = '<item id="c1" href="old.html"/><item id="c1" href="new.html"/>'
        manifest, _ = parse_manifest_and_spine(opf)
        assert manifest["c1"].href == "new.html"

    def test_elements_without_href_ignored(self) -> None:
        opf = (
            '<dc:identifier id="uid">urn:isbn:123</dc:identifier>'
            '<item id="a" href="a.html"/>'
        )
        manifest, _ = parse_manifest_and_spine(opf)
        assert list(manifest) == ["a"]

    def test_spine_keeps_order_and_duplicates(self) -> None:
        opf = build_opf([], ["c2", "c1", "c2"])
        _, spine = parse_manifest_and_spine(opf)
        assert [entry.idref for entry in spine] == ["c2", "c1", "c2"]

    def test_idref_is_not_an_id(self) -> None:
        opf = '<itemref idref="c1" href="x.html"/>'
        manifest, spine = parse_manifest_and_spine(opf)
        assert manifest == {}
        assert [entry.idref for entry in spine] == ["c1"]


class TestParsePackageDocument:
    def test_reading_order_follows_spine(self, tmp_path: Path) -> None:
        opf = build_opf([("c1", "ch1.html"), ("c2", "ch2.html")], ["c2", "c1"])
        document = parse_package_document(write_opf(tmp_path, opf))

        assert document.title == "Sample Book"
        assert document.author == "Sample Author"
        assert document.content_hrefs() == ["ch2.html", "ch1.html"]
        assert document.content_dir == tmp_path / "OEBPS"

    def test_unresolved_spine_entries_dropped(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        opf = build_opf([("c1", "ch1.html")], ["ghost", "c1"])

        with caplog.at_level(logging.WARNING):
            document = parse_package_document(write_opf(tmp_path, opf))

        assert document.content_hrefs() == ["ch1.html"]
        assert "ghost" in caplog.text

    def test_empty_manifest_is_not_an_error(self, tmp_path: Path) -> None:
        document = parse_package_document(write_opf(tmp_path, "<package/>"))
        assert document.manifest == {}
        assert document.content_hrefs() == []

    def test_missing_document_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestParseError, match="Cannot read package document"):
            parse_package_document(tmp_path / "missing.opf")

    def test_undecodable_document_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "content.opf"
        path.write_bytes(b"<dc:title>\xff\xfe</dc:title>")

        with pytest.raises(ManifestParseError):
            parse_package_document(path)
