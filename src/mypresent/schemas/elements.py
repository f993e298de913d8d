"""Section and content element models."""

from __future__ import annotations

from typing import Annotated, Literal, Union
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class ElementModel(BaseModel):
    """Shared configuration for elements: frozen, renderable by name."""

    model_config = ConfigDict(frozen=True)

    kind: str

    @property
    def template_name(self) -> str:
        """Name of the template a renderer uses for this element."""
        return self.kind


class Text(ElementModel):
    """An optionally preformatted paragraph."""

    kind: Literal["text"] = "text"
    lines: tuple[str, ...] = ()
    preformatted: bool = False
    language: str | None = None


class BulletList(ElementModel):
    """A bulleted list."""

    kind: Literal["list"] = "list"
    bullets: tuple[str, ...] = ()


class Link(ElementModel):
    """A hyperlink produced by ``.link``."""

    kind: Literal["link"] = "link"
    url: str
    args: tuple[str, ...] = ()

    @property
    def label(self) -> str:
        """Link text: the extra arguments, or the URL without its scheme."""
        if self.args:
            return " ".join(self.args)
        scheme = urlsplit(self.url).scheme
        if not scheme:
            return self.url
        prefix = "mailto:" if scheme == "mailto" else f"{scheme}://"
        return self.url.replace(prefix, "", 1)


class Image(ElementModel):
    kind: Literal["image"] = "image"
    url: str
    height: int | None = None
    width: int | None = None


class Video(ElementModel):
    kind: Literal["video"] = "video"
    url: str
    source_type: str
    height: int | None = None
    width: int | None = None


class Iframe(ElementModel):
    kind: Literal["iframe"] = "iframe"
    url: str
    height: int | None = None
    width: int | None = None


class RawHTML(ElementModel):
    """Raw HTML included verbatim from a file by ``.html``."""

    kind: Literal["html"] = "html"
    html: str


class Caption(ElementModel):
    kind: Literal["caption"] = "caption"
    text: str


class CodeLine(BaseModel):
    """One line of an included source snippet."""

    model_config = ConfigDict(frozen=True)

    number: PositiveInt
    text: str
    highlighted: bool = False


class Code(ElementModel):
    """A source snippet included by ``.code`` or ``.play``.

    Attributes:
        filename: Base name of the included file.
        ext: Extension of the included file, including the dot.
        lines: Selected lines with their numbers in the original file.
        raw: Selected lines joined with newlines, markers removed.
        play: Whether the snippet is runnable in a playground.
        edit: Whether the snippet is editable (``-edit``).
        numbers: Whether line numbers are shown (``-numbers``).
        prefix: File text before the selection (playground only).
        suffix: File text after the selection (playground only).
    """

    kind: Literal["code"] = "code"
    filename: str
    ext: str = ""
    lines: tuple[CodeLine, ...] = ()
    raw: str = ""
    play: bool = False
    edit: bool = False
    numbers: bool = False
    prefix: str = ""
    suffix: str = ""


class Section(ElementModel):
    """A numbered section of a document, such as a slide.

    A section is itself an element, so subsections nest inside
    ``elements`` in document order.
    """

    kind: Literal["section"] = "section"
    number: tuple[PositiveInt, ...] = Field(..., min_length=1)
    title: str
    elements: tuple[Element, ...] = ()
    notes: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()
    styles: tuple[str, ...] = ()

    @property
    def level(self) -> int:
        """Heading level; the document title is level 1, top sections level 2."""
        return len(self.number) + 1

    @property
    def formatted_number(self) -> str:
        """Section number as ``"2.1."``."""
        return "".join(f"{n}." for n in self.number)

    @property
    def sections(self) -> tuple[Section, ...]:
        """Subsections contained directly in this section."""
        return tuple(element for element in self.elements if isinstance(element, Section))

    def page_number(self, offset: int = 0) -> int:
        """Page number derived from the top-level section number."""
        return self.number[0] + offset


Element = Annotated[
    Union[Text, BulletList, Section, Link, Image, Video, Iframe, RawHTML, Caption, Code],
    Field(discriminator="kind"),
]

Section.model_rebuild()
