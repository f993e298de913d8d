"""Parse slide documents into a document tree."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from mypresent.config import MYPRESENT_TAB_WIDTH
from mypresent.context import ParseContext
from mypresent.directives import DirectiveTable, default_directives
from mypresent.exceptions import (
    DirectiveError,
    ParseError,
    UnexpectedEOFError,
    UnexpectedHeaderLineError,
    UnknownDirectiveError,
)
from mypresent.lines import Lines
from mypresent.schemas import BulletList, Doc, Element, ParseMode, Section, Text

logger = logging.getLogger(__name__)

# Matches any section heading.
_HEADING_RE = re.compile(r"^\*+ ")
# "15:04 2 Jan 2006" or "2 Jan 2006".
_TIME_RE = re.compile(r"(?:([0-9]{1,2}):([0-9]{2}) )?([0-9]{1,2}) ([A-Za-z]{3}) ([0-9]{4})")
_MONTHS = {
    name: index
    for index, name in enumerate(
        ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"),
        start=1,
    )
}
_NOTE_PREFIX = ": "
_COVER_PREFIX = ".cover "
_BULLET_PREFIX = "- "
_LANG_PREFIX = "#lang "


@dataclass
class DocHeader:
    """Title block of a document: everything before the first blank line."""

    title: str
    subtitle: str = ""
    time: datetime | None = None
    title_notes: list[str] = field(default_factory=list)
    cover: str = ""


@dataclass
class _SectionBody:
    elements: list[Element] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)
    styles: list[str] = field(default_factory=list)


def parse(
    text: str,
    name: str,
    mode: ParseMode = ParseMode.FULL,
    context: ParseContext | None = None,
    directives: DirectiveTable | None = None,
) -> Doc:
    """Parse a slide document.

    Args:
        text: Full document source.
        name: Document name, used in error messages and to resolve files
            included by directives.
        mode: ``ParseMode.TITLES_ONLY`` stops after the header.
        context: Read capability for directives. Defaults to the
            filesystem under ``MYPRESENT_CONTENT_PATH``.
        directives: Directive table for this call. Defaults to a fresh
            table of the built-in directives.

    Returns:
        The parsed, immutable document.

    Raises:
        ParseError: If the document is malformed.
    """
    lines = Lines.from_text(text)
    header = parse_header(lines, name)

    if mode == ParseMode.TITLES_ONLY:
        return _build_doc(header)

    if context is None:
        context = ParseContext.from_filesystem()
    if directives is None:
        directives = default_directives()

    misc = parse_misc(lines)
    sections = parse_sections(context, directives, name, lines, [])
    logger.debug("Parsed %s: %d top-level sections", name, len(sections))

    return _build_doc(header, misc=misc, sections=sections)


def _build_doc(
    header: DocHeader,
    *,
    misc: list[str] | None = None,
    sections: list[Section] | None = None,
) -> Doc:
    return Doc(
        title=header.title,
        subtitle=header.subtitle,
        time=header.time,
        title_notes=header.title_notes,
        cover=header.cover,
        misc=misc or [],
        sections=sections or [],
    )


def parse_header(lines: Lines, name: str = "") -> DocHeader:
    """Consume the title line and the header lines that follow it.

    Raises:
        UnexpectedEOFError: If the input holds no title.
        UnexpectedHeaderLineError: If a second free-text line follows the subtitle.
    """
    # First non-empty line starts the header.
    title = lines.next_non_empty()
    if title is None:
        raise UnexpectedEOFError("title")
    header = DocHeader(title=title)

    while True:
        text = lines.next()
        if not text:
            break

        if text.startswith(_NOTE_PREFIX):
            header.title_notes.append(text[len(_NOTE_PREFIX) :])
            continue

        if text.startswith(_COVER_PREFIX):
            if header.cover:
                logger.warning("%s:%d: cover already set, replacing it", name, lines.line_number)
            header.cover = text[len(_COVER_PREFIX) :]
            continue

        time = parse_time(text)
        if time is not None:
            header.time = time
        elif not header.subtitle:
            header.subtitle = text
        else:
            raise UnexpectedHeaderLineError(text, filename=name, line_number=lines.line_number)

    return header


def parse_time(text: str) -> datetime | None:
    """Parse ``"15:04 2 Jan 2006"`` or ``"2 Jan 2006"`` as a UTC time.

    A date without a time is placed at 11:00 UTC, when it is the same
    calendar date everywhere. Returns None if neither format matches.
    """
    match = _TIME_RE.fullmatch(text)
    if match is None:
        return None
    hour, minute, day, month_name, year = match.groups()
    month = _MONTHS.get(month_name.lower())
    if month is None:
        return None
    try:
        date = datetime(int(year), month, int(day), tzinfo=timezone.utc)
        if hour is None:
            # At 11:00 UTC it is the same calendar date everywhere.
            return date + timedelta(hours=11)
        return date.replace(hour=int(hour), minute=int(minute))
    except ValueError:
        return None


def parse_misc(lines: Lines) -> list[str]:
    """Collect the non-empty lines that precede the first top-level heading."""
    misc: list[str] = []
    while True:
        text = lines.next_non_empty()
        if text is None:
            break
        if text.startswith("* "):
            lines.back()
            break
        misc.append(text)
    return misc


def _is_lesser_heading(text: str, prefix: str) -> bool:
    """True if text is a heading at the level of ``prefix`` or above it."""
    return bool(_HEADING_RE.match(text)) and not text.startswith(prefix + "*")


def parse_sections(
    context: ParseContext,
    directives: DirectiveTable,
    name: str,
    lines: Lines,
    number: list[int],
) -> list[Section]:
    """Parse consecutive sections at the level below ``number``.

    An empty ``number`` parses top-level sections. Parsing stops at the
    first line that is not a heading of this level, leaving it unread.
    """
    sections: list[Section] = []
    prefix = "*" * (len(number) + 1)
    marker = prefix + " "

    index = 0
    while True:
        # Next non-empty line is the title.
        text = lines.next_non_empty()
        if text is None:
            break
        if not text.startswith(marker):
            lines.back()
            break

        index += 1
        section_number = [*number, index]
        body = _parse_section_body(context, directives, name, lines, section_number, prefix)
        sections.append(
            Section(
                number=section_number,
                title=text[len(marker) :],
                elements=body.elements,
                notes=body.notes,
                classes=body.classes,
                styles=body.styles,
            )
        )

    return sections


def _parse_section_body(
    context: ParseContext,
    directives: DirectiveTable,
    name: str,
    lines: Lines,
    number: list[int],
    prefix: str,
) -> _SectionBody:
    body = _SectionBody()

    text = lines.next_non_empty()
    while text is not None and not _is_lesser_heading(text, prefix):
        element: Element | None = None

        if text[0].isspace():
            element = _parse_preformatted(lines, text)
        elif text.startswith(_BULLET_PREFIX):
            element = _parse_list(lines, text)
        elif text.startswith(_NOTE_PREFIX):
            body.notes.append(text[len(_NOTE_PREFIX) :])
        elif text.startswith(prefix + "* "):
            lines.back()
            body.elements.extend(parse_sections(context, directives, name, lines, number))
        elif text.startswith("."):
            element = _parse_directive(context, directives, name, lines, text, body)
        else:
            element = _parse_paragraph(lines, text)

        if element is not None:
            body.elements.append(element)

        text = lines.next_non_empty()

    # A heading that ends this section belongs to the caller.
    if text is not None and _HEADING_RE.match(text):
        lines.back()

    return body


def _parse_preformatted(lines: Lines, text: str) -> Text | None:
    width = len(text) - len(text.lstrip())
    if width == len(text):
        return None
    indent = text[:width]

    block: list[str] = []
    language = None
    current: str | None = text
    while current is not None and (current.startswith(indent) or current == ""):
        if current:
            current = current[width:]
        if not block and current.startswith(_LANG_PREFIX):
            language = current[len(_LANG_PREFIX) :]
        else:
            block.append(current)
        current = lines.next()
    lines.back()

    pre = "\n".join(block).replace("\t", " " * MYPRESENT_TAB_WIDTH).rstrip()
    return Text(lines=[pre], preformatted=True, language=language)


def _parse_list(lines: Lines, text: str) -> BulletList:
    bullets: list[str] = []
    current: str | None = text
    while current is not None and current.startswith(_BULLET_PREFIX):
        bullets.append(current[len(_BULLET_PREFIX) :])
        current = lines.next()
    lines.back()
    return BulletList(bullets=bullets)


def _parse_paragraph(lines: Lines, text: str) -> Text | None:
    collected: list[str] = []
    current: str | None = text
    while current is not None and current.strip():
        if current.startswith("."):
            # A directive breaks a text block.
            lines.back()
            break
        if current.startswith("\\."):
            # Backslash escapes an initial period.
            current = current[1:]
        collected.append(current)
        current = lines.next()
    if not collected:
        return None
    return Text(lines=collected)


def _parse_directive(
    context: ParseContext,
    directives: DirectiveTable,
    name: str,
    lines: Lines,
    text: str,
    body: _SectionBody,
) -> Element | None:
    args = text.split()
    line_number = lines.line_number

    if args[0] == ".background":
        if len(args) < 2:
            raise DirectiveError(
                ".background requires a URL", filename=name, line_number=line_number
            )
        body.classes.append("background")
        body.styles.append(f"background-image: url('{args[1]}')")
        return None

    parser = directives.get(args[0][1:])
    if parser is None:
        raise UnknownDirectiveError(args[0], filename=name, line_number=line_number)

    logger.debug("%s:%d: dispatching %s", name, line_number, args[0])
    try:
        return parser(context, name, line_number, text)
    except ParseError as exc:
        exc.locate(name, line_number)
        raise
