from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import IO, Any

import pandas as pd

from ..models.contact_record import ContactRecord
from ..models.errors import ParseError, UnsupportedFormatError

"""Contact file reader (CSV / Excel -> ContactRecord).

Uploaded lists come from many sources, so column names are matched loosely:
each header is lower-cased, trimmed and classified by substring into one of
first_name / phone / notes (checked in that order). When several headers land
on the same field, the right-most one wins.

Rows without a first name or a phone are dropped silently. Reader failures
(bad encoding, corrupt workbook, I/O) raise ParseError and nothing read so far
is returned.

CSV is read in chunks via pandas. For workbooks only the first sheet is read,
with its first row as the header.
"""

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "DEFAULT_CSV_CHUNK_SIZE",
    "normalize_extension",
    "classify_header",
    "cell_to_str",
    "resolve_row",
    "resolve_header_mapping",
    "iter_frames",
    "parse_file",
]

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".csv", ".xls", ".xlsx"})
SPREADSHEET_EXTENSIONS = frozenset({".xls", ".xlsx"})
DEFAULT_CSV_CHUNK_SIZE = 1000
CSV_ENCODING = "utf-8-sig"  # BOM from Excel "Save as CSV" is dropped

FIRST_NAME_KEYS = ("firstname", "first_name", "first name")
PHONE_KEYS = ("phone", "mobile")
NOTES_KEYS = ("notes", "note")

FileSource = str | Path | IO[bytes]


def normalize_extension(extension: str) -> str:
    """Return ``extension`` as a lower-case dotted suffix or raise UnsupportedFormatError.

    Accepts ``"CSV"``, ``".csv"``, ``" .Xlsx "`` and so on. No I/O happens here.
    """
    ext = (extension or "").strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(extension)
    return ext


def _declared_extension(source: FileSource, extension: str | None) -> str:
    if extension is not None:
        return normalize_extension(extension)
    if isinstance(source, (str, Path)):
        return normalize_extension(Path(source).suffix)
    # binary handle: fall back to its name attribute (open() sets it)
    return normalize_extension(Path(str(getattr(source, "name", ""))).suffix)


def classify_header(header: Any) -> str | None:
    """Map a column header to ``first_name`` / ``phone`` / ``notes`` or None.

    >>> classify_header(" Phone Number ")
    'phone'
    >>> classify_header("First Name")
    'first_name'
    >>> classify_header("email") is None
    True
    """
    key = str(header).lower().strip()
    if any(k in key for k in FIRST_NAME_KEYS):
        return "first_name"
    if any(k in key for k in PHONE_KEYS):
        return "phone"
    if any(k in key for k in NOTES_KEYS):
        return "notes"
    return None


def cell_to_str(value: Any) -> str:
    """Coerce a cell to a trimmed string; missing cells become "".

    Workbooks hand numbers back as floats once a column contains a blank, so an
    integral float is rendered without its ``.0`` (phone numbers).
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    elif not isinstance(value, str) and pd.isna(value):
        return ""
    return str(value).strip()


def resolve_header_mapping(headers: Iterable[Any]) -> dict[str, str]:
    """Return field -> header for the headers that classify (last header wins)."""
    mapping: dict[str, str] = {}
    for header in headers:
        target = classify_header(header)
        if target is not None:
            mapping[target] = str(header)
    return mapping


def resolve_row(row: Mapping[Any, Any]) -> ContactRecord | None:
    """Reduce one raw row to a ContactRecord, or None when it has no first name / phone."""
    fields: dict[str, str] = {}
    for header, value in row.items():
        target = classify_header(header)
        if target is not None:
            # a later column overwrites an earlier match
            fields[target] = cell_to_str(value)

    first_name = fields.get("first_name", "")
    phone = fields.get("phone", "")
    if not first_name or not phone:
        return None
    return ContactRecord(first_name=first_name, phone=phone, notes=fields.get("notes", ""))


def _csv_frames(source: FileSource, chunk_size: int) -> Iterator[pd.DataFrame]:
    try:
        reader = pd.read_csv(
            source,
            dtype=str,
            index_col=False,
            keep_default_na=False,
            na_filter=False,
            encoding=CSV_ENCODING,
            chunksize=chunk_size,
        )
        with reader:
            yield from reader
    except pd.errors.EmptyDataError:
        # zero-byte / header-less file: nothing to read, not a failure
        return
    except (ValueError, OSError) as e:  # ParserError and UnicodeDecodeError are ValueErrors
        raise ParseError(e) from e


def _sheet_frames(source: FileSource) -> Iterator[pd.DataFrame]:
    try:
        with pd.ExcelFile(source) as workbook:
            if not workbook.sheet_names:
                return
            first_sheet = workbook.sheet_names[0]
            # text cells such as "N/A" or "NULL" stay text, blank cells come back as ""
            df = workbook.parse(
                first_sheet,
                header=0,
                dtype=object,
                keep_default_na=False,
                na_values=[],
            )
    except Exception as e:
        # corrupt / unreadable workbook: any engine error is fatal for the file
        raise ParseError(e) from e
    yield df


def iter_frames(
    source: FileSource,
    extension: str | None = None,
    *,
    chunk_size: int = DEFAULT_CSV_CHUNK_SIZE,
) -> Iterator[pd.DataFrame]:
    """Return an iterator of raw DataFrames for ``source``.

    The extension is validated eagerly (UnsupportedFormatError before any I/O);
    reading itself happens lazily while the iterator is consumed.
    """
    ext = _declared_extension(source, extension)
    if ext in SPREADSHEET_EXTENSIONS:
        return _sheet_frames(source)
    return _csv_frames(source, chunk_size)


def parse_file(
    source: FileSource,
    extension: str | None = None,
    *,
    chunk_size: int = DEFAULT_CSV_CHUNK_SIZE,
) -> list[ContactRecord]:
    """Read ``source`` and return its kept ContactRecords in file row order.

    Parameters
    ----------
    source: file path or binary handle (the caller owns its lifecycle)
    extension: declared extension; defaults to the suffix of ``source``
    chunk_size: CSV rows per chunk

    Raises
    ------
    UnsupportedFormatError: extension is not csv / xls / xlsx
    ParseError: the file could not be read; no records are returned
    """
    frames = iter_frames(source, extension, chunk_size=chunk_size)
    records: list[ContactRecord] = []
    seen = 0
    for df in frames:
        for row in df.to_dict(orient="records"):
            seen += 1
            record = resolve_row(row)
            if record is not None:
                records.append(record)
    logger.debug(f"reader: kept {len(records)} of {seen} rows")
    return records
