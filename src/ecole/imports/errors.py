"""File-level import errors and per-row error records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


class ImportFileError(Exception):
    """A problem with the imported file as a whole.

    Fatal errors abort the batch; the only non-fatal case is the CSV parse
    warning notice, which is reported next to the parsed rows.
    """

    code = "FILE_ERROR"
    title = "Erreur de fichier"
    fatal = True

    def __init__(self, description: Optional[str] = None, *, title: Optional[str] = None) -> None:
        super().__init__(description or self.title)
        self.description = description
        if title is not None:
            self.title = title

    def as_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "title": self.title,
            "description": self.description,
            "fatal": self.fatal,
        }


class UnsupportedFileType(ImportFileError):
    code = "UNSUPPORTED_FILE_TYPE"
    title = "Type de fichier non pris en charge"

    def __init__(self, extension: str) -> None:
        super().__init__("Veuillez uploader un fichier CSV, Excel ou JSON.")
        self.extension = extension


class EmptyFile(ImportFileError):
    code = "EMPTY_FILE"
    title = "Erreur d'analyse CSV"

    def __init__(self) -> None:
        super().__init__("Le fichier CSV ne contient pas de données valides.")


class NoSheet(ImportFileError):
    code = "NO_SHEET"
    title = "Erreur Excel"

    def __init__(self) -> None:
        super().__init__("Aucune feuille trouvée dans le fichier Excel")


class EmptySheet(ImportFileError):
    code = "EMPTY_SHEET"
    title = "Erreur Excel"

    def __init__(self) -> None:
        super().__init__("Feuille de calcul vide dans le fichier Excel")


class MissingFields(ImportFileError):
    code = "MISSING_FIELDS"
    title = "Erreur de structure CSV"

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Champs manquants dans le fichier CSV : {', '.join(self.missing)}")


class TooManyRows(ImportFileError):
    code = "TOO_MANY_ROWS"
    title = "Fichier trop volumineux"

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"Le fichier contient {count} lignes, la limite est de {limit}.")
        self.count = count
        self.limit = limit


class FileParseError(ImportFileError):
    code = "PARSE_ERROR"


class EmptyExport(ImportFileError):
    code = "EMPTY_EXPORT"
    title = "Exportation impossible"

    def __init__(self) -> None:
        super().__init__("Il n'y a pas de données à exporter. Veuillez d'abord uploader un fichier.")


class CsvParseWarnings(ImportFileError):
    code = "CSV_PARSE_WARNINGS"
    title = "Avertissement d'analyse CSV"
    fatal = False

    def __init__(self, warnings: Iterable["ParseWarning"]) -> None:
        self.warnings = list(warnings)
        details = ", ".join(f"Ligne {warning.row}: {warning.message}" for warning in self.warnings)
        super().__init__(f"Des problèmes ont été détectés lors de l'analyse du fichier CSV : {details}")


@dataclass(frozen=True)
class ParseWarning:
    """Row-level CSV structure problem; the row itself is still returned."""

    row: int
    code: str
    message: str


@dataclass(frozen=True)
class RowValidationError:
    """One violated field of one row (rows are 1-based, header excluded)."""

    row: int
    field: str
    title: str
    description: Optional[str]
