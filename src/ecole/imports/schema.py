"""Adapter exposing a pydantic model as an import target schema."""

from __future__ import annotations

import enum
import types
from typing import Any, Mapping, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError


class FieldKind(str, enum.Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


def _field_kind(annotation: Any) -> FieldKind:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return _field_kind(members[0])
        return FieldKind.STRING
    if annotation is bool:
        return FieldKind.BOOLEAN
    if annotation in (int, float):
        return FieldKind.NUMBER
    return FieldKind.STRING


class ImportSchema:
    """Field names, expected kinds and validation of one import target."""

    def __init__(self, model: Type[BaseModel]) -> None:
        self.model = model
        self._kinds: dict[str, FieldKind] = {}
        self._required: list[str] = []
        for name, info in model.model_fields.items():
            key = info.alias or name
            self._kinds[key] = _field_kind(info.annotation)
            if info.is_required():
                self._required.append(key)

    @classmethod
    def from_model(cls, model: Type[BaseModel]) -> "ImportSchema":
        return cls(model)

    @property
    def field_names(self) -> list[str]:
        return list(self._kinds)

    @property
    def required_fields(self) -> list[str]:
        return list(self._required)

    def field_kind(self, name: str) -> Optional[FieldKind]:
        return self._kinds.get(name)

    def match_key(self, header: str) -> str:
        """Exact match first, then case-insensitive; unknown headers pass through."""

        if header in self._kinds:
            return header
        lowered = header.lower()
        for key in self._kinds:
            if key.lower() == lowered:
                return key
        return header

    def normalize(self, row: Any) -> Any:
        if not isinstance(row, Mapping):
            return row
        return {self.match_key(str(key)): value for key, value in row.items()}

    def validate(self, row: Any) -> tuple[Optional[dict[str, Any]], list[tuple[str, str]]]:
        """Return the coerced row, or the list of ``(field path, message)`` violations."""

        try:
            instance = self.model.model_validate(row)
        except ValidationError as exc:
            return None, [
                (".".join(str(part) for part in error["loc"]), error["msg"])
                for error in exc.errors()
            ]
        return instance.model_dump(by_alias=True, exclude_unset=True, mode="json"), []
