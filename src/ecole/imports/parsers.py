"""Format-specific readers turning uploaded bytes into untyped rows."""

from __future__ import annotations

import csv
import enum
import io
import json
import re
import zipfile
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .errors import EmptySheet, FileParseError, NoSheet, ParseWarning, UnsupportedFileType
from .schema import FieldKind, ImportSchema


class FileType(str, enum.Enum):
    CSV = "csv"
    EXCEL = "excel"
    JSON = "json"


_EXTENSIONS = {
    "csv": FileType.CSV,
    "xlsx": FileType.EXCEL,
    "xls": FileType.EXCEL,
    "json": FileType.JSON,
}

# Leading zeros are kept as text so identifiers such as "0012" survive.
_NUMBER = re.compile(r"^-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][-+]?\d+)?$|^-?\.\d+$")


def detect_file_type(file_name: str) -> FileType:
    extension = file_name.rsplit(".", 1)[-1].lower()
    try:
        return _EXTENSIONS[extension]
    except KeyError:
        raise UnsupportedFileType(extension) from None


def parse_number(text: str) -> int | float | None:
    candidate = text.strip()
    if not _NUMBER.match(candidate):
        return None
    if any(marker in candidate for marker in ".eE"):
        return float(candidate)
    return int(candidate)


def coerce_cell(value: str) -> Any:
    """Guess the type of a CSV cell: empty -> None, number, boolean or text."""

    if value == "" or value.isspace():
        return None
    if value in ("true", "TRUE", "True"):
        return True
    if value in ("false", "FALSE", "False"):
        return False
    number = parse_number(value)
    return value if number is None else number


def coerce_to_schema(row: dict[str, Any], schema: ImportSchema) -> dict[str, Any]:
    """Convert text cells to the number/boolean kind the schema declares."""

    coerced: dict[str, Any] = {}
    for key, value in row.items():
        kind = schema.field_kind(key)
        if isinstance(value, str) and kind is FieldKind.NUMBER:
            number = parse_number(value)
            coerced[key] = value if number is None else number
        elif isinstance(value, str) and kind is FieldKind.BOOLEAN:
            lowered = value.strip().lower()
            coerced[key] = {"true": True, "false": False}.get(lowered, value)
        else:
            coerced[key] = value
    return coerced


def _decode(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def _is_blank(cells: list[Any]) -> bool:
    return all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in cells)


def parse_csv(content: bytes) -> tuple[list[dict[str, Any]], list[ParseWarning]]:
    """Read a CSV with a header row; structure problems become warnings."""

    reader = csv.reader(io.StringIO(_decode(content), newline=""))
    header: list[str] | None = None
    rows: list[dict[str, Any]] = []
    warnings: list[ParseWarning] = []
    try:
        for record in reader:
            if _is_blank(record):
                continue
            if header is None:
                header = [name.strip() for name in record]
                continue
            row_number = len(rows) + 1
            if len(record) > len(header):
                warnings.append(
                    ParseWarning(
                        row_number,
                        "TooManyFields",
                        f"Too many fields: expected {len(header)} fields but parsed {len(record)}",
                    )
                )
            elif len(record) < len(header):
                warnings.append(
                    ParseWarning(
                        row_number,
                        "TooFewFields",
                        f"Too few fields: expected {len(header)} fields but parsed {len(record)}",
                    )
                )
            rows.append({name: coerce_cell(value) for name, value in zip(header, record)})
    except csv.Error as exc:
        raise FileParseError(str(exc), title="Erreur d'analyse CSV") from exc
    return rows, warnings


def parse_excel(content: bytes) -> list[dict[str, Any]]:
    """Read the first worksheet: header row, then one row per non-blank line."""

    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as exc:
        raise FileParseError(str(exc) or "Fichier Excel illisible", title="Erreur d'analyse Excel") from exc

    try:
        if not workbook.sheetnames:
            raise NoSheet()
        grid = [list(values) for values in workbook.worksheets[0].iter_rows(values_only=True)]
    finally:
        workbook.close()

    lines = [values for values in grid if not _is_blank(values)]
    if not lines:
        raise EmptySheet()

    header = [str(cell).strip() if cell is not None else None for cell in lines[0]]
    rows: list[dict[str, Any]] = []
    for values in lines[1:]:
        row = {
            name: value
            for name, value in zip(header, values)
            if name and value is not None and not (isinstance(value, str) and value == "")
        }
        rows.append(row)
    return rows


def parse_json(content: bytes) -> list[Any]:
    """A top-level object is one row; an array is a list of rows."""

    try:
        data = json.loads(_decode(content))
    except json.JSONDecodeError as exc:
        raise FileParseError(str(exc), title="Erreur d'analyse JSON") from exc
    return data if isinstance(data, list) else [data]


def rows_to_workbook(rows: list[dict[str, Any]]) -> Workbook:
    """Build a single-sheet workbook (header row + values) from records."""

    workbook = Workbook()
    sheet = workbook.active
    header: list[str] = []
    for row in rows:
        for key in row:
            if key not in header:
                header.append(key)
    sheet.append(header)
    for row in rows:
        sheet.append([row.get(key) for key in header])
    return workbook
