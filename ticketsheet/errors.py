"""Exception hierarchy shared by the fetcher, the sheets client and the API.

Missing elements inside a fetched page are never errors; the extractor
degrades them to empty strings.  Only the failures below leave the pipeline.
"""

from __future__ import annotations


class TicketSheetError(Exception):
    """Base class for every error the pipeline raises on purpose."""


class InvalidRequestError(TicketSheetError):
    """A required request field (sheet, link or content) is missing."""


class FetchError(TicketSheetError):
    """The source page could not be fetched or rendered."""


class SheetNotFoundError(TicketSheetError, LookupError):
    """No tab with the requested name exists in the spreadsheet."""

    def __init__(self, sheet_name: str) -> None:
        super().__init__(f"Sheet {sheet_name!r} not found in spreadsheet.")
        self.sheet_name = sheet_name


class SheetWriteError(TicketSheetError):
    """A clear, append or batchUpdate call against the Sheets API failed."""
