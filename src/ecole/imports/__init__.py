"""File import and row validation pipeline."""

from .errors import (
    CsvParseWarnings,
    EmptyExport,
    EmptyFile,
    EmptySheet,
    FileParseError,
    ImportFileError,
    MissingFields,
    NoSheet,
    ParseWarning,
    RowValidationError,
    TooManyRows,
    UnsupportedFileType,
)
from .pipeline import DataImport, ValidationBanner, export_to_csv, export_to_xlsx
from .schema import FieldKind, ImportSchema

__all__ = [
    "CsvParseWarnings",
    "DataImport",
    "EmptyExport",
    "EmptyFile",
    "EmptySheet",
    "FieldKind",
    "FileParseError",
    "ImportFileError",
    "ImportSchema",
    "MissingFields",
    "NoSheet",
    "ParseWarning",
    "RowValidationError",
    "TooManyRows",
    "UnsupportedFileType",
    "ValidationBanner",
    "export_to_csv",
    "export_to_xlsx",
]
