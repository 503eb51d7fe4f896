"""Spreadsheet side: row layout, formatting plan and the Sheets API client."""

from ticketsheet.sheets.client import SheetsClient, build_sheets_client
from ticketsheet.sheets.formatting import FormatOp, plan_formatting
from ticketsheet.sheets.rows import Row, RowKind, build_rows, detect_header_rows, to_values

__all__ = [
    "SheetsClient",
    "build_sheets_client",
    "FormatOp",
    "plan_formatting",
    "Row",
    "RowKind",
    "build_rows",
    "detect_header_rows",
    "to_values",
]
