"""Directive dispatch table and the built-in directive parsers."""

from __future__ import annotations

import logging
import os
import re
from typing import Callable, Iterable, Mapping
from urllib.parse import urlsplit

from mypresent.config import MYPRESENT_SOURCE_ENCODING
from mypresent.context import ParseContext
from mypresent.exceptions import DirectiveError
from mypresent.schemas import Caption, Element, Iframe, Image, Link, RawHTML, Video

logger = logging.getLogger(__name__)

DirectiveParser = Callable[[ParseContext, str, int, str], Element]

_SIZE_RE = re.compile(r"[0-9]+")


class DirectiveTable:
    """Maps directive names (without the leading dot) to their parsers."""

    def __init__(self, parsers: Mapping[str, DirectiveParser] | None = None) -> None:
        self._parsers: dict[str, DirectiveParser] = {}
        for name, parser in (parsers or {}).items():
            self.register(name, parser)

    def register(self, name: str, parser: DirectiveParser) -> None:
        if name in self._parsers:
            raise ValueError(f"Directive '{name}' already registered")
        self._parsers[name] = parser
        logger.debug("Registered directive: %s", name)

    def get(self, name: str) -> DirectiveParser | None:
        return self._parsers.get(name)

    def remove(self, name: str) -> None:
        try:
            del self._parsers[name]
        except KeyError:
            raise KeyError(f"Directive '{name}' not found") from None

    def names(self) -> list[str]:
        return sorted(self._parsers)

    def copy(self) -> DirectiveTable:
        return DirectiveTable(self._parsers)

    def __contains__(self, name: object) -> bool:
        return name in self._parsers

    def __len__(self) -> int:
        return len(self._parsers)


def default_directives() -> DirectiveTable:
    """Build a fresh table holding every built-in directive."""
    from mypresent.code import parse_code

    return DirectiveTable(
        {
            "code": parse_code,
            "play": parse_code,
            "link": parse_link,
            "iframe": parse_iframe,
            "html": parse_html,
            "caption": parse_caption,
            "image": parse_image,
            "video": parse_video,
        }
    )


def resolve_path(document_name: str, filename: str) -> str:
    """Resolve ``filename`` against the directory holding the document."""
    return os.path.normpath(os.path.join(os.path.dirname(document_name), filename))


def read_included_file(context: ParseContext, path: str) -> str:
    """Read an included file through the context, decoding it as text.

    Raises:
        DirectiveError: If the file cannot be read.
    """
    try:
        data = context.read_file(path)
    except OSError as exc:
        raise DirectiveError(f"cannot read {path}: {exc}") from exc
    return data.decode(MYPRESENT_SOURCE_ENCODING, errors="replace")


def parse_size_args(args: Iterable[str], text: str) -> tuple[int | None, int | None]:
    """Parse optional ``HEIGHT WIDTH`` arguments; ``_`` leaves a value unset."""
    values: list[int | None] = []
    for arg in args:
        if arg == "_":
            values.append(None)
        elif _SIZE_RE.fullmatch(arg):
            values.append(_to_int(arg, text))
        else:
            raise DirectiveError(f"bad size argument {arg!r} in {text!r}")
    if not values:
        return None, None
    if len(values) != 2:
        raise DirectiveError(f"incorrect invocation: {text!r}")
    return values[0], values[1]


def _to_int(arg: str, text: str) -> int:
    try:
        return int(arg)
    except ValueError as exc:
        raise DirectiveError(f"bad size argument {arg!r} in {text!r}") from exc


def parse_link(context: ParseContext, filename: str, line_number: int, text: str) -> Link:
    args = text.split()
    if len(args) < 2:
        raise DirectiveError("link element must have at least 2 arguments")
    try:
        urlsplit(args[1])
    except ValueError as exc:
        raise DirectiveError(f"invalid link URL {args[1]!r}: {exc}") from exc
    return Link(url=args[1], args=args[2:])


def parse_image(context: ParseContext, filename: str, line_number: int, text: str) -> Image:
    args = text.split()
    if len(args) < 2:
        raise DirectiveError(f"incorrect image invocation: {text!r}")
    height, width = parse_size_args(args[2:], text)
    return Image(url=args[1], height=height, width=width)


def parse_iframe(context: ParseContext, filename: str, line_number: int, text: str) -> Iframe:
    args = text.split()
    if len(args) < 2:
        raise DirectiveError(f"incorrect iframe invocation: {text!r}")
    height, width = parse_size_args(args[2:], text)
    return Iframe(url=args[1], height=height, width=width)


def parse_video(context: ParseContext, filename: str, line_number: int, text: str) -> Video:
    args = text.split()
    if len(args) < 3:
        raise DirectiveError(f"incorrect video invocation: {text!r}")
    height, width = parse_size_args(args[3:], text)
    return Video(url=args[1], source_type=args[2], height=height, width=width)


def parse_caption(context: ParseContext, filename: str, line_number: int, text: str) -> Caption:
    return Caption(text=text.strip().removeprefix(".caption").strip())


def parse_html(context: ParseContext, filename: str, line_number: int, text: str) -> RawHTML:
    args = text.split()
    if len(args) != 2:
        raise DirectiveError("invalid .html args")
    return RawHTML(html=read_included_file(context, resolve_path(filename, args[1])))
