from __future__ import annotations

from typing import Annotated, Literal, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .text_utils import _round1


class _Model(BaseModel):
    # Python attributes stay snake_case; dumps with by_alias=True use camelCase.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Token(_Model):
    """A positioned run of text. y grows toward the top of the page."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    font_size: float
    font_name: str = "unknown"

    @field_validator("x", "y", "width", "height", "font_size", mode="before")
    @classmethod
    def _round_one_decimal(cls, v):
        return _round1(v)

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2.0


class PlacedToken(NamedTuple):
    token: Token
    column: Optional[int] = None


class Column(_Model):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    start_x: float
    end_x: float
    center_x: float


class Table(_Model):
    rows: list[list[Token]] = Field(default_factory=list)

    @property
    def header(self) -> list[Token]:
        return self.rows[0] if self.rows else []

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0


class Figure(_Model):
    label: str
    number: str
    caption: str
    x: float
    y: float
    alt_text: str = ""  # filled by an outside editor, never here


class Equation(_Model):
    text: str
    tokens: list[Token] = Field(default_factory=list)
    y: float


class PageInput(_Model):
    page_number: int
    width: float
    height: float
    tokens: list[Token] = Field(default_factory=list)


class Page(_Model):
    page_number: int
    width: float
    height: float
    tokens: list[Token] = Field(default_factory=list)
    columns: int = 0
    has_table: bool = False
    table: Optional[Table] = None
    figures: list[Figure] = Field(default_factory=list)
    equations: list[Equation] = Field(default_factory=list)
    text: str = ""

    @property
    def text_length(self) -> int:
        return len(self.text)


class Heading(_Model):
    type: Literal["heading"] = "heading"
    text: str
    level: int
    font_size: float
    page_number: int
    y: Optional[float] = None


class Paragraph(_Model):
    type: Literal["paragraph"] = "paragraph"
    text: str
    page_number: int
    y: Optional[float] = None


class TableItem(_Model):
    type: Literal["table"] = "table"
    table: Table
    page_number: int
    y: Optional[float] = None


class FigureItem(_Model):
    type: Literal["figure"] = "figure"
    figure: Figure
    page_number: int
    y: Optional[float] = None


class EquationItem(_Model):
    type: Literal["equation"] = "equation"
    equation: Equation
    index: int
    page_number: int
    y: Optional[float] = None


StructuredContentItem = Annotated[
    Union[Heading, Paragraph, TableItem, FigureItem, EquationItem],
    Field(discriminator="type"),
]


class Document(_Model):
    title: str = "Unknown"
    author: str = "Unknown"
    page_count: int = 0
    is_scanned: bool = False
    body_font_size: float = 0.0
    max_font_size: float = 0.0
    pages: list[Page] = Field(default_factory=list)
    content: list[StructuredContentItem] = Field(default_factory=list)

    def content_for_page(self, page_number: int) -> list:
        return [c for c in self.content if c.page_number == page_number]
