"""Local configuration for mypresent."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_CONTENT_PATH = "."
DEFAULT_SOURCE_ENCODING = "utf-8"
DEFAULT_TAB_WIDTH = 4

_TRUTHY = {"1", "true", "yes", "on"}

# Root directory the default filesystem context resolves included files against.
MYPRESENT_CONTENT_PATH = Path(os.getenv("MYPRESENT_CONTENT_PATH", DEFAULT_CONTENT_PATH)).expanduser().resolve()
MYPRESENT_SOURCE_ENCODING = os.getenv("MYPRESENT_SOURCE_ENCODING", DEFAULT_SOURCE_ENCODING)
MYPRESENT_PLAY_ENABLED = os.getenv("MYPRESENT_PLAY_ENABLED", "").strip().lower() in _TRUTHY
MYPRESENT_TAB_WIDTH = int(os.getenv("MYPRESENT_TAB_WIDTH", str(DEFAULT_TAB_WIDTH)))
