"""Google Sheets collaborator.

:class:`SheetsClient` wraps a ``sheets v4`` discovery resource for one
spreadsheet.  It is built once per process by :func:`build_sheets_client`
and handed to whatever needs it; nothing here is a module-level global.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from googleapiclient.errors import HttpError

from ticketsheet.config import Settings
from ticketsheet.errors import SheetNotFoundError, SheetWriteError
from ticketsheet.sheets.formatting import FormatOp, to_requests

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetsClient:
    """Clear, append and format tabs of a single spreadsheet."""

    def __init__(self, service: Any, spreadsheet_id: str) -> None:
        self._service = service
        self.spreadsheet_id = spreadsheet_id

    @property
    def _spreadsheets(self) -> Any:
        return self._service.spreadsheets()

    def sheet_id(self, sheet_name: str) -> int:
        """Resolve a tab name to its numeric ``sheetId``.

        Raises:
            SheetNotFoundError: If no tab has that title.
        """
        try:
            metadata = self._spreadsheets.get(
                spreadsheetId=self.spreadsheet_id
            ).execute()
        except HttpError as exc:
            raise SheetWriteError(f"Failed to read spreadsheet metadata: {exc}") from exc

        for sheet in metadata.get("sheets", []):
            properties = sheet.get("properties", {})
            if properties.get("title") == sheet_name:
                return properties["sheetId"]
        raise SheetNotFoundError(sheet_name)

    def _batch_update(self, requests: list[dict[str, Any]]) -> None:
        self._spreadsheets.batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": requests},
        ).execute()

    def clear(self, sheet_name: str) -> None:
        """Remove all values and user-entered formatting from *sheet_name*."""
        sheet_id = self.sheet_id(sheet_name)
        try:
            self._spreadsheets.values().clear(
                spreadsheetId=self.spreadsheet_id,
                range=sheet_name,
                body={},
            ).execute()
            self._batch_update(
                [{"updateCells": {"range": {"sheetId": sheet_id}, "fields": "userEnteredFormat"}}]
            )
        except HttpError as exc:
            raise SheetWriteError(f"Failed to clear {sheet_name!r}: {exc}") from exc
        logger.info("Cleared data and formatting in %r", sheet_name)

    def append(self, sheet_name: str, values: Sequence[Sequence[str]]) -> None:
        """Append *values* after the last non-empty row of *sheet_name*.

        Values are sent ``USER_ENTERED`` so ``=HYPERLINK(...)`` cells become
        live links.
        """
        try:
            self._spreadsheets.values().append(
                spreadsheetId=self.spreadsheet_id,
                range=sheet_name,
                valueInputOption="USER_ENTERED",
                body={"values": [list(row) for row in values]},
            ).execute()
        except HttpError as exc:
            raise SheetWriteError(f"Failed to append to {sheet_name!r}: {exc}") from exc
        logger.info("Appended %d row(s) to %r", len(values), sheet_name)

    def apply(self, sheet_name: str, ops: Sequence[FormatOp]) -> None:
        """Send *ops* to *sheet_name* as one ordered ``batchUpdate``."""
        if not ops:
            return
        sheet_id = self.sheet_id(sheet_name)
        try:
            self._batch_update(to_requests(ops, sheet_id))
        except HttpError as exc:
            raise SheetWriteError(f"Failed to format {sheet_name!r}: {exc}") from exc
        logger.info("Applied %d formatting op(s) to %r", len(ops), sheet_name)


def build_sheets_client(config: Settings) -> SheetsClient:
    """Build a :class:`SheetsClient` from service-account settings.

    Raises:
        ValueError: If the service-account JSON or spreadsheet id is missing
            or malformed.
    """
    from google.oauth2 import service_account  # noqa: PLC0415
    from googleapiclient.discovery import build  # noqa: PLC0415

    if not config.spreadsheet_id:
        raise ValueError("SPREADSHEET_ID is not set.")
    try:
        info = json.loads(config.google_service_account)
    except json.JSONDecodeError as exc:
        raise ValueError(f"GOOGLE_SERVICE_ACCOUNT is not valid JSON: {exc}") from exc

    credentials = service_account.Credentials.from_service_account_info(
        info, scopes=SCOPES
    )
    service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
    return SheetsClient(service, config.spreadsheet_id)
