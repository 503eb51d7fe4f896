"""Scraper package — page fetch & ticket section extraction."""

from ticketsheet.scraper.extractor import (
    HEADINGS_PROFILE,
    SECTIONS_PROFILE,
    ExtractionProfile,
    extract_sections,
    profile_for_mode,
)
from ticketsheet.scraper.fetcher import open_document
from ticketsheet.scraper.models import Document, Item, RawPage, Section

__all__ = [
    "open_document",
    "extract_sections",
    "profile_for_mode",
    "ExtractionProfile",
    "SECTIONS_PROFILE",
    "HEADINGS_PROFILE",
    "Document",
    "Item",
    "RawPage",
    "Section",
]
