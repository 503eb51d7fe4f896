"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from ticketsheet.api import app

    uvicorn ticketsheet.api:app --reload
"""

from ticketsheet.api.app import app, create_app

__all__ = ["app", "create_app"]
