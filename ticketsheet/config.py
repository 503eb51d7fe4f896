"""Centralised settings for the ticketsheet service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/125.0.0.0 Safari/537.36"
)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Google Sheets
    # ------------------------------------------------------------------
    spreadsheet_id: str = field(
        default_factory=lambda: os.environ.get("SPREADSHEET_ID", "")
    )
    google_service_account: str = field(
        default_factory=lambda: os.environ.get("GOOGLE_SERVICE_ACCOUNT", "")
    )

    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    fetch_backend: str = field(
        default_factory=lambda: os.environ.get("FETCH_BACKEND", "auto")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    render_wait_timeout: float = field(
        default_factory=lambda: float(os.environ.get("RENDER_WAIT_TIMEOUT", "5.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("USER_AGENT", _DEFAULT_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    extraction_mode: str = field(
        default_factory=lambda: os.environ.get("EXTRACTION_MODE", "sections")
    )

    # ------------------------------------------------------------------
    # Sheet styling
    # ------------------------------------------------------------------
    body_font_size: int = field(
        default_factory=lambda: int(os.environ.get("BODY_FONT_SIZE", "12"))
    )
    header_font_size: int = field(
        default_factory=lambda: int(os.environ.get("HEADER_FONT_SIZE", "14"))
    )
    apply_borders: bool = field(
        default_factory=lambda: _env_bool("APPLY_BORDERS", True)
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )
    log_dir: Path | None = field(
        default_factory=lambda: (
            Path(os.environ["LOG_DIR"]) if os.environ.get("LOG_DIR") else None
        )
    )


# Module-level default, import this everywhere:
#   from ticketsheet.config import settings
settings = Settings()
