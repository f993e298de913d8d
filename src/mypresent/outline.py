"""Walk and summarize the section tree of a parsed document."""

from __future__ import annotations

from typing import Iterable, Iterator

from mypresent.schemas import Doc, Section


def iter_sections(sections: Iterable[Section]) -> Iterator[Section]:
    """Yield every section depth-first, parents before their subsections."""
    for section in sections:
        yield section
        yield from iter_sections(section.sections)


def count_sections(sections: Iterable[Section]) -> int:
    """Count total sections in the tree."""
    total = 0
    for section in sections:
        total += 1
        total += count_sections(section.sections)
    return total


def format_sections_tree(doc: Doc) -> str:
    """Render the section tree as an indented plain-text outline."""
    return "Sections:\n" + _create_sections_tree(doc.sections)


def _create_sections_tree(sections: Iterable[Section], indent: int = 0) -> str:
    lines: list[str] = []
    for section in sections:
        lines.append(" " * (indent * 4) + f"{section.formatted_number} {section.title}")
        if section.sections:
            lines.append(_create_sections_tree(section.sections, indent + 1))
    return "\n".join(lines)
