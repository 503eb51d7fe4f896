"""FastAPI application factory.

Lifespan
--------
On startup the app configures logging from settings and builds a single
:class:`~ticketsheet.sheets.SheetsClient` (shared across all requests via
``request.app.state.sheets``).  The factory that builds it is injectable, so
tests can hand in a fake.

Routes
------
    POST /data     — scrape a page and overwrite a sheet tab
    GET  /test     — read-only preview of the rows a page would produce
    GET  /health   — liveness probe
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ticketsheet import __version__
from ticketsheet.config import Settings, settings
from ticketsheet.log import configure_logging
from ticketsheet.sheets.client import SheetsClient, build_sheets_client

from ticketsheet.api.routers import export as export_router

logger = logging.getLogger(__name__)

SheetsFactory = Callable[[Settings], SheetsClient]


def create_app(
    sheets_factory: SheetsFactory = build_sheets_client,
    config: Settings = settings,
) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Configure logging and build the Sheets client once per process."""
        configure_logging(config.log_level, config.log_dir)
        app.state.settings = config
        app.state.sheets = sheets_factory(config)
        logger.info("Sheets client ready for spreadsheet %s", config.spreadsheet_id)
        yield

    app = FastAPI(
        title="ticketsheet API",
        description=(
            "Scrapes ticket sections from a web page and writes them, "
            "formatted, into a Google Sheets tab."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(export_router.router, tags=["export"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn ticketsheet.api.app:app
app = create_app()
