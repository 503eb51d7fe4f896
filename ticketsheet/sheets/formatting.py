"""Derive Sheets ``batchUpdate`` formatting requests from row values.

:func:`plan_formatting` returns :class:`FormatOp` objects in the order they
must be applied: the whole-table pass first, then column auto-resize, then
per-header styling, then per-row borders.  Later ops override earlier ones
on the cells they share.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Union

from ticketsheet.sheets.rows import detect_header_rows, is_blank

_BLACK_SOLID = {"style": "SOLID", "width": 1, "color": {"red": 0, "green": 0, "blue": 0}}
_BORDER_EDGES = ("top", "bottom", "left", "right", "innerHorizontal", "innerVertical")

RESIZED_COLUMNS = 3


def _grid_range(
    sheet_id: int, start_row: int, end_row: int, end_col: int
) -> dict[str, int]:
    return {
        "sheetId": sheet_id,
        "startRowIndex": start_row,
        "endRowIndex": end_row,
        "startColumnIndex": 0,
        "endColumnIndex": end_col,
    }


@dataclass(frozen=True)
class WholeRangeStyle:
    """Centre, middle-align and wrap every cell of the table."""

    row_count: int
    col_count: int
    font_size: int = 12

    def to_request(self, sheet_id: int) -> dict[str, Any]:
        return {
            "repeatCell": {
                "range": _grid_range(sheet_id, 0, self.row_count, self.col_count),
                "cell": {
                    "userEnteredFormat": {
                        "textFormat": {"fontSize": self.font_size},
                        "horizontalAlignment": "CENTER",
                        "verticalAlignment": "MIDDLE",
                        "wrapStrategy": "WRAP",
                    }
                },
                "fields": (
                    "userEnteredFormat(textFormat,horizontalAlignment,"
                    "wrapStrategy,verticalAlignment)"
                ),
            }
        }


@dataclass(frozen=True)
class ColumnAutoResize:
    start_index: int = 0
    end_index: int = RESIZED_COLUMNS

    def to_request(self, sheet_id: int) -> dict[str, Any]:
        return {
            "autoResizeDimensions": {
                "dimensions": {
                    "sheetId": sheet_id,
                    "dimension": "COLUMNS",
                    "startIndex": self.start_index,
                    "endIndex": self.end_index,
                }
            }
        }


@dataclass(frozen=True)
class HeaderRowStyle:
    """Bold, larger text on a single section header row."""

    row_index: int
    col_count: int
    font_size: int = 14

    def to_request(self, sheet_id: int) -> dict[str, Any]:
        return {
            "repeatCell": {
                "range": _grid_range(
                    sheet_id, self.row_index, self.row_index + 1, self.col_count
                ),
                "cell": {
                    "userEnteredFormat": {
                        "textFormat": {"bold": True, "fontSize": self.font_size},
                        "horizontalAlignment": "CENTER",
                        "wrapStrategy": "WRAP",
                    }
                },
                "fields": "userEnteredFormat(wrapStrategy,textFormat,horizontalAlignment)",
            }
        }


@dataclass(frozen=True)
class RowBorder:
    """Solid black outline and inner lines around one row."""

    row_index: int
    col_count: int

    def to_request(self, sheet_id: int) -> dict[str, Any]:
        request: dict[str, Any] = {
            "range": _grid_range(
                sheet_id, self.row_index, self.row_index + 1, self.col_count
            )
        }
        for edge in _BORDER_EDGES:
            request[edge] = {**_BLACK_SOLID, "color": dict(_BLACK_SOLID["color"])}
        return {"updateBorders": request}


FormatOp = Union[WholeRangeStyle, ColumnAutoResize, HeaderRowStyle, RowBorder]


def plan_formatting(
    values: Sequence[Sequence[Optional[str]]],
    header_rows: Optional[Iterable[int]] = None,
    body_font_size: int = 12,
    header_font_size: int = 14,
    borders: bool = True,
) -> List[FormatOp]:
    """Return the formatting ops for *values*, in application order.

    Args:
        values: Plain row values as appended to the sheet.
        header_rows: Header row indices; detected from *values* when omitted.
        body_font_size: Font size for the whole-table pass.
        header_font_size: Font size for header rows.
        borders: Outline every non-blank row.
    """
    row_count = len(values)
    col_count = max((len(row) for row in values), default=0)
    if header_rows is None:
        header_rows = detect_header_rows(values)

    ops: List[FormatOp] = [
        WholeRangeStyle(row_count, col_count, body_font_size),
        ColumnAutoResize(0, RESIZED_COLUMNS),
    ]
    ops.extend(
        HeaderRowStyle(index, col_count, header_font_size)
        for index in sorted(set(header_rows))
    )
    if borders:
        ops.extend(
            RowBorder(index, col_count)
            for index, row in enumerate(values)
            if not is_blank(row)
        )
    return ops


def to_requests(ops: Sequence[FormatOp], sheet_id: int) -> List[dict[str, Any]]:
    """Render *ops* as ``batchUpdate`` request bodies for *sheet_id*."""
    return [op.to_request(sheet_id) for op in ops]
