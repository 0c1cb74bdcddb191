"""Book data model."""

from pydantic import BaseModel, ConfigDict, Field


class Chapter(BaseModel):
    """One reading unit of a book."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    plain_text: str = ""  # Markup stripped, for search and fallback display
    markup: str = ""  # Renderable markup, original or synthesized


class Book(BaseModel):
    """The canonical result of parsing a book file.

    ``chapters`` is kept in reading order: spine order for e-book archives,
    physical line order for plain text.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    author: str
    chapters: tuple[Chapter, ...] = ()
    cover_image: bytes | None = None
    source_path: str = ""
    file_format: str = ""  # "txt", "epub", "unsupported"
    is_placeholder: bool = False
