"""ticketsheet CLI — entry-point for exports, previews and the HTTP server.

Usage:
    python cli/main.py --help

Commands:
    export   → scrape a page and overwrite a sheet tab
    preview  → print the rows a page would produce (nothing is written)
    serve    → run the HTTP API under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from ticketsheet.xxx
# import ...` works when the CLI is invoked as `python cli/main.py` from
# any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from ticketsheet.config import settings
from ticketsheet.errors import TicketSheetError
from ticketsheet.log import configure_logging
from ticketsheet.pipeline import ExportRequest, export_to_sheet, preview as preview_rows
from ticketsheet.sheets.client import build_sheets_client

app = typer.Typer(
    name="ticketsheet",
    help="Scrape ticket sections from a web page into Google Sheets.",
    no_args_is_help=True,
)

_MODE_HELP = "Extraction mode: sections | headings."
_BACKEND_HELP = "Fetch backend: static | browser | auto."


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL."),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level or settings.log_level, settings.log_dir)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------
@app.command("export")
def export(
    sheet: str = typer.Option(..., help="Target tab name."),
    url: str = typer.Option(..., help="Ticket page URL."),
    scope: str = typer.Option(..., help="CSS selector of the page region to search."),
    mode: Optional[str] = typer.Option(None, help=_MODE_HELP),
    backend: Optional[str] = typer.Option(None, help=_BACKEND_HELP),
) -> None:
    """Scrape URL and overwrite SHEET with the formatted ticket table."""
    request = ExportRequest(sheet=sheet, link=url, content=scope)
    try:
        request.validate()
        sheets = build_sheets_client(settings)
    except (TicketSheetError, ValueError) as exc:
        typer.echo(f"[export] ❌ {exc}")
        raise typer.Exit(1)

    typer.echo(f"[export] Scraping {url!r} (scope={scope!r}) …")
    try:
        values = export_to_sheet(request, sheets, mode=mode, backend=backend)
    except TicketSheetError as exc:
        typer.echo(f"[export] ❌ {exc}")
        raise typer.Exit(1)

    typer.echo(f"[export] ✅ Wrote {len(values)} row(s) to {sheet!r}")


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------
@app.command("preview")
def preview(
    url: str = typer.Option(..., help="Ticket page URL."),
    scope: str = typer.Option(..., help="CSS selector of the page region to search."),
    mode: Optional[str] = typer.Option(None, help=_MODE_HELP),
    backend: Optional[str] = typer.Option(None, help=_BACKEND_HELP),
) -> None:
    """Print the rows URL would produce as JSON.  Nothing is written."""
    try:
        page = preview_rows(url, scope, mode=mode, backend=backend)
    except TicketSheetError as exc:
        typer.echo(f"[preview] ❌ {exc}")
        raise typer.Exit(1)

    typer.echo(f"[preview] Title : {page.title or '(none)'}")
    typer.echo(f"[preview] Rows  : {len(page.rows)}")
    typer.echo(json.dumps(page.values, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Serve
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(3000, help="Bind port."),
) -> None:
    """Run the HTTP API."""
    import uvicorn  # noqa: PLC0415

    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("ticketsheet.api.app:app", host=host, port=port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
