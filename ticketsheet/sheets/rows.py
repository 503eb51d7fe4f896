"""Flatten extracted sections into sheet rows.

Layout written to the tab::

    [page title, source url, ""]
    ["", "", ""]
    [section title, "Date", "Link"]      <- one block per section
    [label, descriptor, link] ...
    ["", "", ""]

Rows are tagged with a :class:`RowKind` when built.  The plain 3-cell lists
returned by :func:`to_values` are what leaves the process; consumers that
only see those lists recover the header rows with :func:`detect_header_rows`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ticketsheet.scraper.models import Section

HEADER_DATE = "Date"
HEADER_LINK = "Link"


class RowKind(enum.Enum):
    TITLE = "title"
    HEADER = "header"
    ITEM = "item"
    BLANK = "blank"


@dataclass(frozen=True)
class Row:
    kind: RowKind
    cells: tuple[str, str, str]

    @classmethod
    def title(cls, page_title: str, link: str) -> Row:
        return cls(RowKind.TITLE, (page_title, link, ""))

    @classmethod
    def header(cls, section_title: str) -> Row:
        return cls(RowKind.HEADER, (section_title, HEADER_DATE, HEADER_LINK))

    @classmethod
    def item(cls, label: str, descriptor: str, link: str) -> Row:
        return cls(RowKind.ITEM, (label, descriptor, link))

    @classmethod
    def blank(cls) -> Row:
        return cls(RowKind.BLANK, ("", "", ""))


def build_rows(page_title: str, link: str, sections: Sequence[Section]) -> List[Row]:
    """Lay out *sections* under a title row.

    Every section contributes a header and a trailing blank row even when it
    has no items, so ``len(result) == 2 + sum(2 + len(s.items))``.
    """
    rows = [Row.title(page_title, link), Row.blank()]
    for section in sections:
        rows.append(Row.header(section.title))
        for item in section.items:
            rows.append(Row.item(item.label, item.descriptor, item.link))
        rows.append(Row.blank())
    return rows


def to_values(rows: Sequence[Row]) -> List[List[str]]:
    """Return the plain cell lists sent to the Sheets API."""
    return [list(row.cells) for row in rows]


def is_blank(cells: Sequence[Optional[str]]) -> bool:
    """A row is blank when every cell is empty, ``None`` or whitespace."""
    return all(not cell or not cell.strip() for cell in cells)


def is_header(cells: Sequence[Optional[str]]) -> bool:
    """Exact, case-sensitive match on the ``Date`` / ``Link`` marker cells."""
    return len(cells) >= 3 and cells[1] == HEADER_DATE and cells[2] == HEADER_LINK


def detect_header_rows(values: Sequence[Sequence[Optional[str]]]) -> List[int]:
    """Return the indices of header rows in *values*, ascending."""
    return [i for i, cells in enumerate(values) if is_header(cells)]


def header_indices(rows: Sequence[Row]) -> List[int]:
    """Header positions taken from the construction-time tags."""
    return [i for i, row in enumerate(rows) if row.kind is RowKind.HEADER]
