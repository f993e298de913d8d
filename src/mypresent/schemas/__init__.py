"""Shared schemas for mypresent."""

from mypresent.schemas.document import Doc, ParseMode
from mypresent.schemas.elements import (
    BulletList,
    Caption,
    Code,
    CodeLine,
    Element,
    Iframe,
    Image,
    Link,
    RawHTML,
    Section,
    Text,
    Video,
)

__all__ = [
    "BulletList",
    "Caption",
    "Code",
    "CodeLine",
    "Doc",
    "Element",
    "Iframe",
    "Image",
    "Link",
    "ParseMode",
    "RawHTML",
    "Section",
    "Text",
    "Video",
]
