"""Tests for the formatting plan derived from row values."""

from __future__ import annotations

from ticketsheet.sheets.formatting import (
    ColumnAutoResize,
    HeaderRowStyle,
    RowBorder,
    WholeRangeStyle,
    plan_formatting,
    to_requests,
)

_LINK_A = '=HYPERLINK("https://x/a", "Click here")'

_VIP_VALUES = [
    ["Gig", "https://example.com/event", ""],
    ["", "", ""],
    ["VIP Access", "Date", "Link"],
    ["Ticket A", "Mon 1 Jan", _LINK_A],
    ["Ticket B", "", ""],
    ["", "", ""],
]


def _border_rows(ops) -> list[int]:
    return [op.row_index for op in ops if isinstance(op, RowBorder)]


class TestPlanFormatting:
    def test_vip_scenario(self) -> None:
        ops = plan_formatting(_VIP_VALUES)
        assert ops[0] == WholeRangeStyle(6, 3, 12)
        assert ops[1] == ColumnAutoResize(0, 3)
        assert ops[2] == HeaderRowStyle(2, 3, 14)
        assert _border_rows(ops) == [0, 2, 3, 4]
        assert len(ops) == 7

    def test_no_sections(self) -> None:
        values = [["Gig", "https://example.com/event", ""], ["", "", ""]]
        ops = plan_formatting(values)
        assert [type(op) for op in ops] == [WholeRangeStyle, ColumnAutoResize, RowBorder]
        assert _border_rows(ops) == [0]

    def test_whole_range_first_even_for_empty_input(self) -> None:
        ops = plan_formatting([])
        assert ops[0] == WholeRangeStyle(0, 0, 12)
        assert _border_rows(ops) == []

    def test_all_blank_rows_get_no_borders(self) -> None:
        ops = plan_formatting([["", "", ""], [" ", "", ""], ["", "", ""]])
        assert isinstance(ops[0], WholeRangeStyle)
        assert _border_rows(ops) == []

    def test_col_count_is_widest_row(self) -> None:
        ops = plan_formatting([["a"], ["b", "c", "d", "e"], ["f", "g"]])
        assert ops[0].col_count == 4
        assert all(op.col_count == 4 for op in ops if isinstance(op, RowBorder))

    def test_explicit_header_indices_sorted_and_deduplicated(self) -> None:
        ops = plan_formatting(_VIP_VALUES, header_rows=[4, 2, 4])
        headers = [op.row_index for op in ops if isinstance(op, HeaderRowStyle)]
        assert headers == [2, 4]

    def test_header_ops_precede_border_ops(self) -> None:
        kinds = [type(op).__name__ for op in plan_formatting(_VIP_VALUES)]
        assert kinds.index("HeaderRowStyle") < kinds.index("RowBorder")

    def test_style_constants_are_configurable(self) -> None:
        ops = plan_formatting(_VIP_VALUES, body_font_size=10, header_font_size=12)
        assert ops[0].font_size == 10
        assert ops[2].font_size == 12

    def test_borders_can_be_disabled(self) -> None:
        assert _border_rows(plan_formatting(_VIP_VALUES, borders=False)) == []


class TestRequests:
    def test_whole_range_request(self) -> None:
        request = WholeRangeStyle(6, 3, 12).to_request(42)["repeatCell"]
        assert request["range"] == {
            "sheetId": 42,
            "startRowIndex": 0,
            "endRowIndex": 6,
            "startColumnIndex": 0,
            "endColumnIndex": 3,
        }
        fmt = request["cell"]["userEnteredFormat"]
        assert fmt["horizontalAlignment"] == "CENTER"
        assert fmt["verticalAlignment"] == "MIDDLE"
        assert fmt["wrapStrategy"] == "WRAP"
        assert fmt["textFormat"] == {"fontSize": 12}

    def test_header_request_targets_single_row(self) -> None:
        request = HeaderRowStyle(5, 3, 14).to_request(1)["repeatCell"]
        assert request["range"]["startRowIndex"] == 5
        assert request["range"]["endRowIndex"] == 6
        assert request["cell"]["userEnteredFormat"]["textFormat"] == {
            "bold": True,
            "fontSize": 14,
        }

    def test_border_request_has_all_edges(self) -> None:
        request = RowBorder(3, 3).to_request(1)["updateBorders"]
        for edge in ("top", "bottom", "left", "right", "innerHorizontal", "innerVertical"):
            assert request[edge]["style"] == "SOLID"
            assert request[edge]["width"] == 1
        assert request["range"]["startRowIndex"] == 3

    def test_auto_resize_request(self) -> None:
        request = ColumnAutoResize().to_request(9)["autoResizeDimensions"]["dimensions"]
        assert request == {"sheetId": 9, "dimension": "COLUMNS", "startIndex": 0, "endIndex": 3}

    def test_to_requests_preserves_order(self) -> None:
        requests = to_requests(plan_formatting(_VIP_VALUES), 0)
        assert list(requests[0]) == ["repeatCell"]
        assert list(requests[1]) == ["autoResizeDimensions"]
        assert list(requests[-1]) == ["updateBorders"]
