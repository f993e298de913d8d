"""The ``.code`` and ``.play`` directives: include a source file or part of one."""

from __future__ import annotations

import logging
import os
import re

from mypresent.config import MYPRESENT_PLAY_ENABLED
from mypresent.context import ParseContext
from mypresent.directives import read_included_file, resolve_path
from mypresent.exceptions import DirectiveError
from mypresent.schemas import Code, CodeLine

logger = logging.getLogger(__name__)

_HIGHLIGHT_RE = re.compile(r"\s+HL([a-zA-Z0-9_]+)?$")
_HL_COMMENT_RE = re.compile(r"(.+) // HL(.*)$")
_CODE_RE = re.compile(r"^\.(code|play)\s+((?:(?:-edit|-numbers)\s+)*)(\S+)(?:\s+(.*))?$")
_NUMBER_RE = re.compile(r"[0-9]+")


def parse_code(context: ParseContext, filename: str, line_number: int, text: str) -> Code:
    """Parse a ``.code`` or ``.play`` invocation.

    Syntax: ``.code [-numbers] [-edit] FILE [ADDRESS] [HLtag]``.

    ADDRESS selects part of the file: a line number, ``$``, a ``/regexp/``,
    or two of these joined by a comma. Lines ending in ``OMIT`` are
    dropped, and lines carrying a ``// HLtag`` comment are highlighted
    when the invocation names the same tag.

    Raises:
        DirectiveError: On bad syntax, an unreadable file, or an address
            that does not match.
    """
    cmd = text.strip()
    highlight = ""
    hl_match = _HIGHLIGHT_RE.search(cmd)
    if hl_match:
        if hl_match.group(1) is None:
            raise DirectiveError("invalid highlight syntax")
        highlight = hl_match.group(1)
        cmd = cmd[: hl_match.start()]

    match = _CODE_RE.match(cmd)
    if not match:
        raise DirectiveError("syntax error in .code/.play invocation")
    command, flags, file, address = match.groups()
    address = (address or "").strip()

    path = resolve_path(filename, file)
    source = read_included_file(context, path)
    lo, hi = address_to_range(address, source)

    # Regexp matches can stop mid-line; widen the range to whole lines.
    while lo > 0 and source[lo - 1] != "\n":
        lo -= 1
    if hi > 0:
        while hi < len(source) and source[hi - 1] != "\n":
            hi += 1

    lines = _format_lines(_code_lines(source, lo, hi), highlight)
    play = command == "play" and MYPRESENT_PLAY_ENABLED
    logger.debug("Included %d lines of %s (play=%s)", len(lines), path, play)

    return Code(
        filename=os.path.basename(path),
        ext=os.path.splitext(path)[1],
        lines=lines,
        raw="".join(line.text + "\n" for line in lines),
        play=play,
        edit="-edit" in flags,
        numbers="-numbers" in flags,
        prefix=source[:lo] if play else "",
        suffix=source[hi:] if play else "",
    )


def address_to_range(address: str, source: str) -> tuple[int, int]:
    """Resolve an address to a ``(start, end)`` character range of ``source``.

    An empty address selects the whole text. ``a1,a2`` selects from the
    start of ``a1`` to the end of ``a2``, with ``a2`` searched after ``a1``.
    """
    if not address:
        return 0, len(source)

    first, rest = _split_address(address)
    lo, hi = _simple_address(first, source, 0)
    if rest is None:
        return lo, hi

    _, end = _simple_address(rest, source, hi)
    if end < lo:
        raise DirectiveError(f"invalid address range {address!r}")
    return lo, end


def _split_address(address: str) -> tuple[str, str | None]:
    """Split ``a1,a2`` on the first comma outside a regexp."""
    in_regexp = False
    escaped = False
    for index, char in enumerate(address):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == "/":
            in_regexp = not in_regexp
        elif char == "," and not in_regexp:
            return address[:index].strip(), address[index + 1 :].strip()
    return address.strip(), None


def _simple_address(address: str, source: str, start: int) -> tuple[int, int]:
    if address == "$":
        return len(source), len(source)
    if _NUMBER_RE.fullmatch(address):
        try:
            number = int(address)
        except ValueError as exc:
            raise DirectiveError(f"bad address {address!r}") from exc
        return _line_range(number, source)
    if len(address) >= 2 and address.startswith("/") and address.endswith("/"):
        return _regexp_range(address[1:-1].replace("\\/", "/"), source, start)
    raise DirectiveError(f"bad address {address!r}")


def _line_range(number: int, source: str) -> tuple[int, int]:
    if number == 0:
        return 0, 0
    lo = 0
    for _ in range(number - 1):
        newline = source.find("\n", lo)
        if newline < 0:
            raise DirectiveError(f"line {number} out of range")
        lo = newline + 1
    if lo >= len(source):
        raise DirectiveError(f"line {number} out of range")
    newline = source.find("\n", lo)
    hi = len(source) if newline < 0 else newline + 1
    return lo, hi


def _regexp_range(pattern: str, source: str, start: int) -> tuple[int, int]:
    try:
        regexp = re.compile(pattern, re.MULTILINE)
    except re.error as exc:
        raise DirectiveError(f"bad regexp {pattern!r}: {exc}") from exc
    match = regexp.search(source, start)
    if match is None and start > 0:
        # No match after the current position; wrap to the beginning.
        match = regexp.search(source)
    if match is None:
        raise DirectiveError(f"no match for {pattern!r}")
    return match.start(), match.end()


def _code_lines(source: str, lo: int, hi: int) -> list[tuple[int, str]]:
    first_number = source.count("\n", 0, lo) + 1
    selected = [text.rstrip("\r") for text in source[lo:hi].split("\n")]
    if selected and selected[-1] == "":
        selected.pop()

    lines = [
        (number, text)
        for number, text in enumerate(selected, start=first_number)
        if not text.endswith("OMIT")
    ]
    while lines and not lines[0][1].strip():
        lines.pop(0)
    while lines and not lines[-1][1].strip():
        lines.pop()
    return lines


def _format_lines(lines: list[tuple[int, str]], highlight: str) -> list[CodeLine]:
    formatted: list[CodeLine] = []
    for number, text in lines:
        highlighted = False
        comment = _HL_COMMENT_RE.match(text)
        if comment:
            text = comment.group(1)
            highlighted = bool(highlight) and comment.group(2) == highlight
        formatted.append(CodeLine(number=number, text=text, highlighted=highlighted))
    return formatted
