"""Import workflow: parse an uploaded file, normalize headers, validate rows."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from typing import Any, Optional, Type

from pydantic import BaseModel

from ..core.config import get_settings
from .errors import (
    CsvParseWarnings,
    EmptyExport,
    EmptyFile,
    ImportFileError,
    MissingFields,
    ParseWarning,
    RowValidationError,
    TooManyRows,
)
from .parsers import FileType, coerce_to_schema, detect_file_type, parse_csv, parse_excel, parse_json, rows_to_workbook
from .schema import ImportSchema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationBanner:
    """Single user-facing summary of a validation run."""

    success: bool
    title: str
    description: Optional[str]


@dataclass(frozen=True)
class ImportColumn:
    key: str
    label: str


class DataImport:
    """Stateful import session bound to one target schema.

    Every ``parse_file`` call starts from a clean state: previous rows and
    errors are replaced, never merged.
    """

    def __init__(self, schema: ImportSchema | Type[BaseModel], *, max_rows: Optional[int] = None) -> None:
        self.schema = schema if isinstance(schema, ImportSchema) else ImportSchema.from_model(schema)
        self.max_rows = get_settings().import_max_rows if max_rows is None else max_rows
        if self.max_rows <= 0:
            raise ValueError("max_rows must be a positive integer")
        self.clear_errors()

    def clear_errors(self) -> None:
        self.parsed_rows: list[Any] = []
        self.errors: list[RowValidationError] = []
        self.parse_warnings: list[ParseWarning] = []
        self.file_error: Optional[ImportFileError] = None
        self.validation_message: Optional[ValidationBanner] = None

    @property
    def columns(self) -> list[ImportColumn]:
        return [ImportColumn(key, key[:1].upper() + key[1:]) for key in self.schema.field_names]

    @property
    def error_rows(self) -> set[int]:
        return {error.row for error in self.errors}

    def accepted_rows(self) -> list[Any]:
        failed = self.error_rows
        return [row for index, row in enumerate(self.parsed_rows, start=1) if index not in failed]

    def parse_file(self, content: bytes, file_name: str) -> tuple[list[Any], Optional[ImportFileError]]:
        self.clear_errors()
        try:
            rows = self._read(content, file_name)
            if len(rows) > self.max_rows:
                raise TooManyRows(len(rows), self.max_rows)
        except ImportFileError as exc:
            logger.warning("import of %s rejected: %s", file_name, exc.code)
            self.parse_warnings = []
            self.file_error = exc
            return [], exc

        self._validate_rows(rows)
        logger.info("import of %s parsed %d rows with %d errors", file_name, len(self.parsed_rows), len(self.errors))
        return self.parsed_rows, self.file_error

    def _read(self, content: bytes, file_name: str) -> list[Any]:
        file_type = detect_file_type(file_name)

        if file_type is FileType.CSV:
            raw_rows, warnings = parse_csv(content)
            if warnings:
                self.parse_warnings = warnings
                self.file_error = CsvParseWarnings(warnings)
            if not raw_rows:
                raise EmptyFile()
            rows = [self.schema.normalize(row) for row in raw_rows]
            missing = [name for name in self.schema.required_fields if name not in rows[0]]
            if missing:
                raise MissingFields(missing)
            return rows

        if file_type is FileType.EXCEL:
            return [coerce_to_schema(self.schema.normalize(row), self.schema) for row in parse_excel(content)]

        return [self.schema.normalize(row) for row in parse_json(content)]

    def _validate_rows(self, rows: list[Any]) -> None:
        validated: list[Any] = []
        errors: list[RowValidationError] = []
        for index, row in enumerate(rows, start=1):
            output, violations = self.schema.validate(row)
            if violations:
                errors.extend(
                    RowValidationError(
                        row=index,
                        field=field,
                        title=f"Erreur à la ligne {index}",
                        description=message,
                    )
                    for field, message in violations
                )
                validated.append(row)
            else:
                validated.append(output)

        self.parsed_rows = validated
        self.errors = errors
        if errors:
            self.validation_message = ValidationBanner(
                success=False,
                title="Erreur de validation",
                description=(
                    f"Des erreurs ont été détectées dans les données ({len(errors)}). "
                    "Veuillez les corriger."
                ),
            )
        else:
            self.validation_message = ValidationBanner(
                success=True,
                title="Validation réussie",
                description="Super, vos données sont correctes et prêtes à être sauvegardées.",
            )


def export_to_csv(rows: list[dict[str, Any]]) -> bytes:
    """Serialize records to CSV (header from the union of keys, in first-seen order)."""

    if not rows:
        raise EmptyExport()
    header: list[str] = []
    for row in rows:
        for key in row:
            if key not in header:
                header.append(key)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=header, lineterminator="\r\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def export_to_xlsx(rows: list[dict[str, Any]]) -> bytes:
    if not rows:
        raise EmptyExport()
    buffer = io.BytesIO()
    rows_to_workbook(rows).save(buffer)
    return buffer.getvalue()
