"""mypresent: parse slide documents into a structured document tree."""

from mypresent.context import ParseContext
from mypresent.directives import DirectiveTable, default_directives
from mypresent.exceptions import (
    DirectiveError,
    MypresentError,
    ParseError,
    UnexpectedEOFError,
    UnexpectedHeaderLineError,
    UnknownDirectiveError,
)
from mypresent.parser import parse
from mypresent.schemas import (
    BulletList,
    Caption,
    Code,
    CodeLine,
    Doc,
    Element,
    Iframe,
    Image,
    Link,
    ParseMode,
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
    "DirectiveError",
    "DirectiveTable",
    "Doc",
    "Element",
    "Iframe",
    "Image",
    "Link",
    "MypresentError",
    "ParseContext",
    "ParseError",
    "ParseMode",
    "RawHTML",
    "Section",
    "Text",
    "UnexpectedEOFError",
    "UnexpectedHeaderLineError",
    "UnknownDirectiveError",
    "Video",
    "default_directives",
    "parse",
]
