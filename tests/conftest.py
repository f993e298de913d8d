"""Test setup for mypresent."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mypresent.context import ParseContext  # noqa: E402

HELLO_GO = """\
package main

import "fmt"

// START OMIT
func main() {
	fmt.Println("hello") // HLprint
}
// END OMIT
"""


@pytest.fixture
def files() -> dict[str, str]:
    """In-memory files available to directive parsers."""
    return {
        "hello.go": HELLO_GO,
        "snippet.html": "<b>bold</b>\n",
        "talks/local.html": "<i>local</i>",
    }


@pytest.fixture
def context(files: dict[str, str]) -> ParseContext:
    """Parse context serving the ``files`` fixture from memory."""
    return ParseContext.from_mapping(files)
