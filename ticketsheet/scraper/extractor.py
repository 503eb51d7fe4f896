"""Ticket extraction: turns a :class:`Document` into ordered :class:`Section` lists.

Two traversal modes are supported:

``sections``
    Each element matching ``{scope} <container>`` is a section.  The title
    and the item elements inside it are found through ordered candidate
    selectors; the first candidate that matches wins.

``headings``
    Each ``{scope} h3`` anchors a section: its nearest ``div.tickets``
    ancestor.  Inside that ancestor the i-th ``h4`` is paired with the i-th
    ``p`` and the i-th ``a`` purely by position.  Pages whose three lists
    drift out of step get mispaired rows; the pairing is kept as-is because
    existing sheets depend on it.

Missing headings, paragraphs or links never raise: they become ``""``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import urljoin

from bs4 import Tag

from ticketsheet.scraper.models import Document, Item, Section

logger = logging.getLogger(__name__)

LINK_TEXT = "Click here"


@dataclass(frozen=True)
class ExtractionProfile:
    """Selector set for one family of ticket pages."""

    mode: str
    container_selectors: tuple[str, ...] = ()
    title_selectors: tuple[str, ...] = ("h3", "h2")
    item_selectors: tuple[str, ...] = ()
    label_selectors: tuple[str, ...] = ("h4",)
    descriptor_selectors: tuple[str, ...] = ("p",)
    link_selectors: tuple[str, ...] = ("a",)
    anchor_selector: str = "h3"
    section_selector: str = "div.tickets"

    def wait_selector(self, scope: str) -> str:
        """Selector a browser render should wait for before extraction."""
        if self.mode == "headings":
            return f"{scope} {self.anchor_selector}"
        return ", ".join(f"{scope} {c}" for c in self.container_selectors)


SECTIONS_PROFILE = ExtractionProfile(
    mode="sections",
    container_selectors=("div.container div.tickets", "div.container div.ticket-container"),
    item_selectors=(".ticket-row", ".find-ticket-items"),
)

HEADINGS_PROFILE = ExtractionProfile(mode="headings")

_PROFILES = {p.mode: p for p in (SECTIONS_PROFILE, HEADINGS_PROFILE)}


def profile_for_mode(mode: str) -> ExtractionProfile:
    """Return the built-in profile for *mode* (``sections`` or ``headings``)."""
    try:
        return _PROFILES[mode]
    except KeyError:
        raise ValueError(
            f"Unknown extraction mode {mode!r}; expected one of {sorted(_PROFILES)}"
        ) from None


# ---------------------------------------------------------------------------
# Selector helpers
# ---------------------------------------------------------------------------

def first_match(element: Tag, candidates: Sequence[str]) -> Optional[Tag]:
    """Return the first element matched by the first candidate that matches."""
    for selector in candidates:
        found = element.select_one(selector)
        if found is not None:
            return found
    return None


def first_nonempty_select(element: Tag, candidates: Sequence[str]) -> List[Tag]:
    """Return all matches of the first candidate selector that matches anything."""
    for selector in candidates:
        found = element.select(selector)
        if found:
            return found
    return []


def _text(element: Optional[Tag]) -> str:
    if element is None:
        return ""
    return element.get_text().strip()


def _first_text(element: Tag, candidates: Sequence[str]) -> str:
    # An empty h3 falls through to h2, same as a missing one.
    for selector in candidates:
        text = _text(element.select_one(selector))
        if text:
            return text
    return ""


def _href(anchor: Optional[Tag], document: Document) -> str:
    if anchor is None:
        return ""
    href = anchor.get("href") or ""
    if isinstance(href, list):
        href = " ".join(href)
    href = href.strip()
    if href and document.resolve_links:
        href = urljoin(document.url, href)
    return href


# ---------------------------------------------------------------------------
# Item normalisation
# ---------------------------------------------------------------------------

def hyperlink_formula(href: str) -> str:
    """Encode *href* as a Sheets ``HYPERLINK`` formula; empty stays empty."""
    if not href:
        return ""
    return f'=HYPERLINK("{href}", "{LINK_TEXT}")'


def make_item(label: str, descriptor: str, href: str, encode_links: bool = True) -> Item:
    """Build an :class:`Item`, encoding *href* unless *encode_links* is off."""
    link = hyperlink_formula(href) if encode_links else href
    return Item(label=label, descriptor=descriptor, link=link)


def normalize_item(
    element: Tag,
    document: Document,
    profile: ExtractionProfile = SECTIONS_PROFILE,
    encode_links: bool = True,
) -> Item:
    """Convert one item element into an :class:`Item`.

    Args:
        element: The item container (e.g. a ``.ticket-row``).
        document: The owning document, used to resolve relative links.
        profile: Supplies the label / descriptor / link selectors.
        encode_links: ``False`` keeps the raw href; only the read-only
            preview uses this.
    """
    return make_item(
        _text(first_match(element, profile.label_selectors)),
        _text(first_match(element, profile.descriptor_selectors)),
        _href(first_match(element, profile.link_selectors), document),
        encode_links,
    )


# ---------------------------------------------------------------------------
# Traversal modes
# ---------------------------------------------------------------------------

def _extract_scoped(
    document: Document,
    scope: str,
    profile: ExtractionProfile,
    encode_links: bool,
) -> List[Section]:
    containers = first_nonempty_select(
        document.soup, [f"{scope} {c}" for c in profile.container_selectors]
    )
    sections: List[Section] = []
    for container in containers:
        item_elements = first_nonempty_select(container, profile.item_selectors)
        sections.append(
            Section(
                title=_first_text(container, profile.title_selectors),
                items=[
                    normalize_item(el, document, profile, encode_links)
                    for el in item_elements
                ],
            )
        )
    return sections


def _at(elements: Sequence[Tag], index: int) -> Optional[Tag]:
    return elements[index] if index < len(elements) else None


def _extract_anchored(
    document: Document,
    scope: str,
    profile: ExtractionProfile,
    encode_links: bool,
) -> List[Section]:
    sections: List[Section] = []
    for heading in document.soup.select(f"{scope} {profile.anchor_selector}"):
        section = Section(title=_text(heading))
        container = heading.css.closest(profile.section_selector)
        if container is not None:
            labels = first_nonempty_select(container, profile.label_selectors)
            descriptors = first_nonempty_select(container, profile.descriptor_selectors)
            links = first_nonempty_select(container, profile.link_selectors)
            for i, label in enumerate(labels):
                section.items.append(
                    make_item(
                        _text(label),
                        _text(_at(descriptors, i)),
                        _href(_at(links, i), document),
                        encode_links,
                    )
                )
        sections.append(section)
    return sections


def extract_sections(
    document: Document,
    scope: str,
    profile: ExtractionProfile = SECTIONS_PROFILE,
    encode_links: bool = True,
) -> List[Section]:
    """Extract every ticket section under *scope*, in document order.

    A scope that matches nothing yields ``[]``.
    """
    if profile.mode == "headings":
        sections = _extract_anchored(document, scope, profile, encode_links)
    else:
        sections = _extract_scoped(document, scope, profile, encode_links)

    logger.info(
        "Extracted %d section(s), %d item(s) from %s (scope=%r, mode=%s)",
        len(sections),
        sum(len(s.items) for s in sections),
        document.url,
        scope,
        profile.mode,
    )
    return sections
