"""Export pipeline — ticket page to spreadsheet tab.

``export_to_sheet`` runs the whole flow for one request:

    validate → fetch/render → extract → release page → build rows
    → clear tab → append rows → apply formatting

Nothing is retried, and nothing is rolled back: a failure after ``clear``
leaves the tab cleared (or partly written).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import soupsieve

from ticketsheet.config import Settings, settings
from ticketsheet.errors import InvalidRequestError
from ticketsheet.scraper.extractor import ExtractionProfile, extract_sections, profile_for_mode
from ticketsheet.scraper.fetcher import BACKENDS, open_document
from ticketsheet.sheets.client import SheetsClient
from ticketsheet.sheets.formatting import plan_formatting
from ticketsheet.sheets.rows import Row, build_rows, header_indices, to_values

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Sheet name, link and content are required."


@dataclass
class ExportRequest:
    """One export: which tab, which page, which region of the page."""

    sheet: Optional[str] = None
    link: Optional[str] = None
    content: Optional[str] = None

    def validate(self) -> None:
        """Reject missing fields and unparsable scope selectors before any I/O.

        Raises:
            InvalidRequestError: On the first problem found.
        """
        if not (self.sheet and self.link and self.content):
            raise InvalidRequestError(MISSING_FIELDS_MESSAGE)
        try:
            soupsieve.compile(self.content)
        except soupsieve.SelectorSyntaxError as exc:
            raise InvalidRequestError(
                f"Invalid content selector {self.content!r}: {exc}"
            ) from exc


@dataclass
class PageRows:
    title: str
    rows: List[Row]

    @property
    def values(self) -> List[List[str]]:
        return to_values(self.rows)


def _resolve_profile(mode: Optional[str], config: Settings) -> ExtractionProfile:
    try:
        return profile_for_mode(mode or config.extraction_mode)
    except ValueError as exc:
        raise InvalidRequestError(str(exc)) from exc


def _resolve_backend(backend: Optional[str], config: Settings) -> str:
    backend = backend or config.fetch_backend
    if backend not in BACKENDS:
        raise InvalidRequestError(
            f"Unknown fetch backend {backend!r}; expected one of {BACKENDS}"
        )
    return backend


def scrape_rows(
    url: str,
    scope: str,
    profile: ExtractionProfile,
    backend: str = "auto",
    encode_links: bool = True,
) -> PageRows:
    """Fetch *url*, extract sections under *scope*, and lay them out as rows.

    The page is released before this returns, whether extraction succeeded
    or not.
    """
    with open_document(url, backend, wait_for=profile.wait_selector(scope)) as document:
        sections = extract_sections(document, scope, profile, encode_links=encode_links)
        title = document.title
    return PageRows(title=title, rows=build_rows(title, url, sections))


def export_to_sheet(
    request: ExportRequest,
    sheets: SheetsClient,
    mode: Optional[str] = None,
    backend: Optional[str] = None,
    config: Settings = settings,
) -> List[List[str]]:
    """Scrape ``request.link`` and overwrite tab ``request.sheet`` with the result.

    Args:
        request: The export request; validated first.
        sheets: Spreadsheet collaborator.
        mode: ``sections`` or ``headings``; defaults to ``config.extraction_mode``.
        backend: ``static``, ``browser`` or ``auto``; defaults to
            ``config.fetch_backend``.
        config: Style constants and defaults.

    Returns:
        The row values written to the tab.

    Raises:
        InvalidRequestError: Missing fields or a bad selector.
        FetchError: The page could not be fetched or rendered.
        SheetNotFoundError: The tab does not exist.
        SheetWriteError: A Sheets API call failed.
    """
    request.validate()
    profile = _resolve_profile(mode, config)

    page = scrape_rows(
        request.link,  # type: ignore[arg-type]
        request.content,  # type: ignore[arg-type]
        profile,
        backend=_resolve_backend(backend, config),
    )
    values = page.values
    ops = plan_formatting(
        values,
        header_indices(page.rows),
        body_font_size=config.body_font_size,
        header_font_size=config.header_font_size,
        borders=config.apply_borders,
    )

    sheets.clear(request.sheet)  # type: ignore[arg-type]
    sheets.append(request.sheet, values)  # type: ignore[arg-type]
    sheets.apply(request.sheet, ops)  # type: ignore[arg-type]

    logger.info("Exported %d row(s) from %s to %r", len(values), request.link, request.sheet)
    return values


def preview(
    url: Optional[str],
    scope: Optional[str],
    mode: Optional[str] = None,
    backend: Optional[str] = None,
    config: Settings = settings,
) -> PageRows:
    """Return the rows an export would produce, with raw hrefs.

    Read-only: nothing is written to any spreadsheet.
    """
    request = ExportRequest(sheet="preview", link=url, content=scope)
    request.validate()
    return scrape_rows(
        url,  # type: ignore[arg-type]
        scope,  # type: ignore[arg-type]
        _resolve_profile(mode, config),
        backend=_resolve_backend(backend, config),
        encode_links=False,
    )
