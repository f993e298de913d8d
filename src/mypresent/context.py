"""Supporting context handed to directive parsers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from mypresent.config import MYPRESENT_CONTENT_PATH

ReadFile = Callable[[str], bytes]


@dataclass(frozen=True)
class ParseContext:
    """Capabilities available while parsing a single document.

    Attributes:
        read_file: Returns the raw bytes of the named file. Raises OSError
            when the file cannot be read.
    """

    read_file: ReadFile

    @classmethod
    def from_filesystem(cls, base_path: Path | str | None = None) -> ParseContext:
        """Build a context that reads files relative to ``base_path``.

        Args:
            base_path: Directory that relative names resolve against.
                Defaults to ``MYPRESENT_CONTENT_PATH``.
        """
        root = Path(base_path) if base_path is not None else MYPRESENT_CONTENT_PATH

        def read_file(filename: str) -> bytes:
            return (root / filename).read_bytes()

        return cls(read_file=read_file)

    @classmethod
    def from_mapping(cls, files: dict[str, bytes | str]) -> ParseContext:
        """Build a context that serves files from memory."""
        contents = {
            name: data.encode("utf-8") if isinstance(data, str) else data
            for name, data in files.items()
        }

        def read_file(filename: str) -> bytes:
            try:
                return contents[filename]
            except KeyError:
                raise FileNotFoundError(f"no such file: {filename}") from None

        return cls(read_file=read_file)
