"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from bs4 import BeautifulSoup


@dataclass
class RawPage:
    """The raw HTML for a single URL fetch or browser render."""

    url: str
    html: str
    status_code: int
    rendered: bool = False


@dataclass
class Document:
    """A parsed page ready for extraction.

    ``resolve_links`` is set for browser-rendered pages, where an anchor's
    ``href`` is read the way the DOM reports it: absolute, resolved against
    the page URL.
    """

    url: str
    title: str
    soup: BeautifulSoup
    resolve_links: bool = False


@dataclass
class Item:
    """One ticket entry.  Every field is a string, never ``None``."""

    label: str = ""
    descriptor: str = ""
    link: str = ""


@dataclass
class Section:
    """A titled group of items, in document order."""

    title: str = ""
    items: List[Item] = field(default_factory=list)
