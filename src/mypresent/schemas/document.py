"""Document model."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from mypresent.schemas.elements import Section


class ParseMode(str, Enum):
    """How much of a document to parse."""

    FULL = "full"
    # Stop after the header; used when listing documents by title.
    TITLES_ONLY = "titles_only"


class Doc(BaseModel):
    """An entire parsed document."""

    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str = ""
    time: datetime | None = None
    title_notes: tuple[str, ...] = ()
    cover: str = ""
    misc: tuple[str, ...] = ()
    sections: tuple[Section, ...] = ()
