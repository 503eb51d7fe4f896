"""Export endpoints.

Routes
------
POST /data     Body: {"sheet": "...", "link": "https://...", "content": "section#tickets"}
GET  /test     ?link=https://...&content=div%23terms     → preview rows, raw hrefs
GET  /health
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from ticketsheet.errors import (
    FetchError,
    InvalidRequestError,
    SheetNotFoundError,
    TicketSheetError,
)
from ticketsheet.pipeline import ExportRequest, export_to_sheet, preview

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class DataRequest(BaseModel):
    # Plain optional strings: missing or unknown values are answered with
    # our 400 from the pipeline, not a 422 from validation.
    sheet: Optional[str] = None
    link: Optional[str] = None
    content: Optional[str] = None
    mode: Optional[str] = None
    backend: Optional[str] = None


class DataResponse(BaseModel):
    message: str
    values: list[list[str]]


class PreviewResponse(BaseModel):
    title: str
    rows: list[list[str]]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status_for(exc: TicketSheetError) -> int:
    if isinstance(exc, InvalidRequestError):
        return 400
    if isinstance(exc, FetchError):
        return 502
    if isinstance(exc, SheetNotFoundError):
        return 404
    return 500


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/data", response_model=DataResponse)
def save_data(body: DataRequest, request: Request) -> dict[str, Any]:
    """Scrape ``link``, extract sections under ``content``, and overwrite ``sheet``.

    The tab is cleared before writing.  A failure part-way through leaves
    whatever was already written.
    """
    export = ExportRequest(sheet=body.sheet, link=body.link, content=body.content)
    try:
        values = export_to_sheet(
            export,
            request.app.state.sheets,
            mode=body.mode,
            backend=body.backend,
            config=request.app.state.settings,
        )
    except TicketSheetError as exc:
        status = _status_for(exc)
        if status >= 500:
            logger.error("Export to %r failed", body.sheet, exc_info=exc)
        raise HTTPException(status_code=status, detail=str(exc)) from exc
    return {"message": "Data saved", "values": values}


@router.get("/test", response_model=PreviewResponse)
def preview_page(
    request: Request,
    link: Optional[str] = None,
    content: Optional[str] = None,
    mode: Optional[str] = None,
    backend: Optional[str] = None,
) -> dict[str, Any]:
    """Return the rows an export of ``link`` would produce, without writing them.

    Links are returned as raw hrefs rather than ``HYPERLINK`` formulas.
    """
    try:
        page = preview(link, content, mode=mode, backend=backend, config=request.app.state.settings)
    except TicketSheetError as exc:
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc
    return {"title": page.title, "rows": page.values}


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
