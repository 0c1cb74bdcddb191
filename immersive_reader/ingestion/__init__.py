"""Book ingestion: format dispatch and parsing pipelines."""

from immersive_reader.ingestion.parser import BookParser, parse

__all__ = ["BookParser", "parse"]
