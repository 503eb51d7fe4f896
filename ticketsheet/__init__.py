"""Ticket page → Google Sheets exporter."""

__version__ = "0.3.0"
