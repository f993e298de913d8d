"""Sequential line access with single-line pushback."""

from __future__ import annotations

from typing import Iterable


class Lines:
    """A cursor over the raw lines of a document.

    Lines whose first character is ``#`` are comments and are never
    returned. ``back`` rewinds exactly one read; it is not a general seek.
    """

    def __init__(self, text: Iterable[str]) -> None:
        self._text = list(text)
        # Index of the next line to examine; after a read it is also the
        # 1-based number of the line just returned.
        self._line = 0
        self._can_back = False

    @classmethod
    def from_text(cls, text: str) -> Lines:
        """Split text on newlines, dropping carriage returns and a final empty line."""
        raw = text.split("\n")
        if raw and raw[-1] == "":
            raw.pop()
        return cls(line[:-1] if line.endswith("\r") else line for line in raw)

    @property
    def line_number(self) -> int:
        """1-based number of the line most recently returned."""
        return self._line

    def next(self) -> str | None:
        """Return the next non-comment line, or None at end of input."""
        self._can_back = True
        while True:
            current = self._line
            self._line += 1
            if current >= len(self._text):
                return None
            text = self._text[current]
            if not text.startswith("#"):
                return text

    def next_non_empty(self) -> str | None:
        """Return the next non-comment, non-empty line, or None at end of input."""
        while True:
            text = self.next()
            if text is None or text:
                return text

    def back(self) -> None:
        """Push the most recently read line back onto the cursor."""
        if not self._can_back:
            raise RuntimeError("back() called without an intervening read")
        self._can_back = False
        self._line -= 1
