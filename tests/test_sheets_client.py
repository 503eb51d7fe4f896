"""Tests for the Google Sheets collaborator.

The ``sheets v4`` discovery resource is replaced with a ``MagicMock``; no
credentials are loaded and no request leaves the process.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
from googleapiclient.errors import HttpError

from ticketsheet.config import Settings
from ticketsheet.errors import SheetNotFoundError, SheetWriteError
from ticketsheet.sheets.client import SCOPES, SheetsClient, build_sheets_client
from ticketsheet.sheets.formatting import ColumnAutoResize, RowBorder, WholeRangeStyle

_METADATA = {
    "sheets": [
        {"properties": {"title": "Sheet1", "sheetId": 0}},
        {"properties": {"title": "Creamfields", "sheetId": 7}},
    ]
}


def _http_error(status: int = 500) -> HttpError:
    return HttpError(MagicMock(status=status, reason="Backend Error"), b"boom")


@pytest.fixture()
def service() -> MagicMock:
    svc = MagicMock()
    svc.spreadsheets.return_value.get.return_value.execute.return_value = _METADATA
    return svc


@pytest.fixture()
def client(service: MagicMock) -> SheetsClient:
    return SheetsClient(service, "spreadsheet-123")


def _batch_bodies(service: MagicMock) -> list[dict]:
    return [
        c.kwargs["body"]
        for c in service.spreadsheets.return_value.batchUpdate.call_args_list
    ]


class TestSheetId:
    def test_resolves_tab_name(self, client: SheetsClient) -> None:
        assert client.sheet_id("Creamfields") == 7

    def test_unknown_tab_raises(self, client: SheetsClient) -> None:
        with pytest.raises(SheetNotFoundError) as info:
            client.sheet_id("Nope")
        assert info.value.sheet_name == "Nope"

    def test_metadata_failure_is_wrapped(self, client: SheetsClient, service: MagicMock) -> None:
        service.spreadsheets.return_value.get.return_value.execute.side_effect = _http_error()
        with pytest.raises(SheetWriteError):
            client.sheet_id("Creamfields")


class TestClear:
    def test_clears_values_then_formatting(self, client: SheetsClient, service: MagicMock) -> None:
        client.clear("Creamfields")

        values_clear = service.spreadsheets.return_value.values.return_value.clear
        values_clear.assert_called_once_with(
            spreadsheetId="spreadsheet-123", range="Creamfields", body={}
        )
        assert _batch_bodies(service) == [
            {
                "requests": [
                    {"updateCells": {"range": {"sheetId": 7}, "fields": "userEnteredFormat"}}
                ]
            }
        ]

    def test_unknown_tab_touches_nothing(self, client: SheetsClient, service: MagicMock) -> None:
        with pytest.raises(SheetNotFoundError):
            client.clear("Missing")
        service.spreadsheets.return_value.values.return_value.clear.assert_not_called()

    def test_api_failure_is_wrapped(self, client: SheetsClient, service: MagicMock) -> None:
        values = service.spreadsheets.return_value.values.return_value
        values.clear.return_value.execute.side_effect = _http_error()
        with pytest.raises(SheetWriteError):
            client.clear("Creamfields")


class TestAppend:
    def test_appends_user_entered_values(self, client: SheetsClient, service: MagicMock) -> None:
        rows = [["T", "https://x", ""], ["", "", ""]]
        client.append("Creamfields", rows)

        append = service.spreadsheets.return_value.values.return_value.append
        append.assert_called_once_with(
            spreadsheetId="spreadsheet-123",
            range="Creamfields",
            valueInputOption="USER_ENTERED",
            body={"values": rows},
        )

    def test_api_failure_is_wrapped(self, client: SheetsClient, service: MagicMock) -> None:
        values = service.spreadsheets.return_value.values.return_value
        values.append.return_value.execute.side_effect = _http_error(400)
        with pytest.raises(SheetWriteError):
            client.append("Creamfields", [["a", "b", "c"]])


class TestApply:
    def test_sends_ops_in_order(self, client: SheetsClient, service: MagicMock) -> None:
        ops = [WholeRangeStyle(2, 3), ColumnAutoResize(), RowBorder(0, 3)]
        client.apply("Creamfields", ops)

        (body,) = _batch_bodies(service)
        assert body["requests"] == [op.to_request(7) for op in ops]

    def test_no_ops_no_call(self, client: SheetsClient, service: MagicMock) -> None:
        client.apply("Creamfields", [])
        service.spreadsheets.return_value.batchUpdate.assert_not_called()


class TestBuildSheetsClient:
    def test_missing_spreadsheet_id(self) -> None:
        config = Settings(spreadsheet_id="", google_service_account="{}")
        with pytest.raises(ValueError, match="SPREADSHEET_ID"):
            build_sheets_client(config)

    def test_invalid_service_account_json(self) -> None:
        config = Settings(spreadsheet_id="abc", google_service_account="not json")
        with pytest.raises(ValueError, match="GOOGLE_SERVICE_ACCOUNT"):
            build_sheets_client(config)

    def test_builds_service_with_spreadsheet_scope(self) -> None:
        info = {"type": "service_account", "client_email": "bot@example.iam.gserviceaccount.com"}
        config = Settings(spreadsheet_id="abc", google_service_account=json.dumps(info))
        with patch(
            "google.oauth2.service_account.Credentials.from_service_account_info"
        ) as mock_creds, patch("googleapiclient.discovery.build") as mock_build:
            client = build_sheets_client(config)

        mock_creds.assert_called_once_with(info, scopes=SCOPES)
        mock_build.assert_called_once_with(
            "sheets", "v4", credentials=mock_creds.return_value, cache_discovery=False
        )
        assert client.spreadsheet_id == "abc"
