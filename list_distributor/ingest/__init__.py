"""Uploaded file ingestion (CSV / Excel -> ContactRecord)."""

from .reader import parse_file, resolve_header_mapping, resolve_row

__all__ = [
    "parse_file",
    "resolve_header_mapping",
    "resolve_row",
]
