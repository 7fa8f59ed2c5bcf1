"""Column metadata for list views."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ColumnDefinition:
    """Display and sort-ability metadata for one table column."""

    key: str
    label: str
    sortable: bool = True


STUDENT_COLUMNS: tuple[ColumnDefinition, ...] = (
    ColumnDefinition("index", "N°"),
    ColumnDefinition("lastName", "Nom"),
    ColumnDefinition("firstName", "Prénom"),
    ColumnDefinition("idNumber", "Matricule"),
    ColumnDefinition("gender", "Sexe"),
    ColumnDefinition("dateOfBirth", "Date de naissance"),
    ColumnDefinition("age", "Age"),
    ColumnDefinition("classroomName", "Classe"),
    ColumnDefinition("actions", "Actions", sortable=False),
)

CLASS_COLUMNS: tuple[ColumnDefinition, ...] = (
    ColumnDefinition("name", "Nom"),
    ColumnDefinition("description", "Description", sortable=False),
    ColumnDefinition("mainTeacherName", "Enseignant principal"),
    ColumnDefinition("studentCount", "Effectif"),
    ColumnDefinition("actions", "Actions", sortable=False),
)


def sortable_keys(columns: tuple[ColumnDefinition, ...]) -> frozenset[str]:
    return frozenset(column.key for column in columns if column.sortable)
