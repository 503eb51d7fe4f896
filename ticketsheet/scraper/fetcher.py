"""Page fetching: plain HTTP with an optional Playwright render.

:func:`open_document` is the only entry point the pipeline uses.  It is a
context manager so the parsed tree (and, for the browser backend, the
Chromium process) is released on every exit path.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Iterator

import httpx
from bs4 import BeautifulSoup

from ticketsheet.config import settings
from ticketsheet.errors import FetchError
from ticketsheet.scraper.models import Document, RawPage

logger = logging.getLogger(__name__)

BACKENDS = ("static", "browser", "auto")

# ---------------------------------------------------------------------------
# SPA / JS-rendered page detection heuristics
# ---------------------------------------------------------------------------
_SPA_PATTERNS = [
    re.compile(r'<div[^>]+id=["\'](?:root|app)["\']', re.IGNORECASE),
    re.compile(r"window\.__NEXT_DATA__", re.IGNORECASE),
    re.compile(r"ng-version=", re.IGNORECASE),
    re.compile(r"data-reactroot", re.IGNORECASE),
]


def _is_spa(html: str) -> bool:
    """Return ``True`` if *html* looks like a JavaScript SPA that needs rendering."""
    for pattern in _SPA_PATTERNS:
        if pattern.search(html):
            return True
    # Very little visible text relative to total HTML size.  Script and
    # style bodies are dropped first so they don't count as text.
    no_scripts = re.sub(
        r"<(script|style)[^>]*>.*?</(script|style)>", "", html,
        flags=re.IGNORECASE | re.DOTALL,
    )
    stripped = re.sub(r"<[^>]+>", "", no_scripts).strip()
    if len(html) > 2000 and len(stripped) < 200:
        return True
    return False


def fetch_static(url: str) -> RawPage:
    """GET *url* with ``httpx`` and return its HTML.

    Raises:
        FetchError: On malformed URLs, transport failures and 4xx/5xx
            responses.
    """
    try:
        with httpx.Client(
            headers={"User-Agent": settings.user_agent},
            timeout=settings.request_timeout,
            follow_redirects=True,
        ) as client:
            response = client.get(url)
            response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        # InvalidURL and the IDNA UnicodeError for bad hosts are not HTTPErrors.
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc

    return RawPage(url=url, html=response.text, status_code=response.status_code)


def render_page(url: str, wait_for: str | None = None) -> RawPage:
    """Render *url* in headless Chromium and return the resulting HTML.

    When *wait_for* is given, waits up to ``settings.render_wait_timeout``
    seconds for it to appear.  A timeout is not an error: whatever is in the
    DOM at that point is returned.

    Playwright is imported lazily so the static path works without a
    browser install.

    Raises:
        FetchError: If the browser cannot be launched or navigation fails.
    """
    from playwright.sync_api import Error as PlaywrightError  # noqa: PLC0415
    from playwright.sync_api import TimeoutError as PlaywrightTimeoutError  # noqa: PLC0415
    from playwright.sync_api import sync_playwright  # noqa: PLC0415

    try:
        with sync_playwright() as pw:
            browser = pw.chromium.launch(headless=True)
            try:
                page = browser.new_page(user_agent=settings.user_agent)
                page.goto(
                    url,
                    timeout=int(settings.request_timeout * 1000),
                    wait_until="domcontentloaded",
                )
                if wait_for:
                    try:
                        page.wait_for_selector(
                            wait_for,
                            timeout=int(settings.render_wait_timeout * 1000),
                        )
                    except PlaywrightTimeoutError:
                        logger.warning(
                            "Timed out after %.1fs waiting for %r on %s; continuing",
                            settings.render_wait_timeout, wait_for, url,
                        )
                html = page.content()
            finally:
                browser.close()
    except PlaywrightError as exc:
        raise FetchError(f"Failed to render {url}: {exc}") from exc

    return RawPage(url=url, html=html, status_code=200, rendered=True)


def fetch_page(url: str, backend: str = "auto", wait_for: str | None = None) -> RawPage:
    """Fetch *url* with the requested *backend*.

    ``auto`` fetches statically and re-renders in a browser only when the
    response looks like a client-rendered single-page app.
    """
    if backend not in BACKENDS:
        raise ValueError(f"Unknown fetch backend {backend!r}; expected one of {BACKENDS}")

    logger.info("Fetching %s (backend=%s)", url, backend)
    if backend == "browser":
        return render_page(url, wait_for)

    raw = fetch_static(url)
    if backend == "auto" and _is_spa(raw.html):
        logger.info("%s looks client-rendered; switching to browser", url)
        raw = render_page(url, wait_for)
    return raw


def parse_document(raw: RawPage) -> Document:
    """Parse *raw* into a :class:`Document`."""
    soup = BeautifulSoup(raw.html, "html.parser")
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""
    return Document(url=raw.url, title=title, soup=soup, resolve_links=raw.rendered)


@contextmanager
def open_document(
    url: str,
    backend: str = "auto",
    wait_for: str | None = None,
) -> Iterator[Document]:
    """Fetch and parse *url*, yielding the :class:`Document`.

    The parse tree is decomposed on exit, whether or not extraction
    succeeded.
    """
    document = parse_document(fetch_page(url, backend, wait_for))
    try:
        yield document
    finally:
        document.soup.decompose()
