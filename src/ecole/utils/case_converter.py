"""Key-case conversion between storage rows and domain records.

Rows read from the database use snake_case column names while the domain
records handed to list views use camelCase. ``convert_case`` re-keys a
mapping (recursively) without ever touching its values.
"""

from __future__ import annotations

import enum
import re
from typing import Any, Callable, Iterable, Mapping


class InvalidInputError(TypeError):
    """Raised when the value to convert is not a mapping."""


class CaseType(str, enum.Enum):
    """Supported target cases."""

    CAMEL = "camelCase"
    SNAKE = "snakeCase"
    KEBAB = "kebabCase"
    PASCAL = "pascalCase"
    SCREAMING_SNAKE = "screamingSnakeCase"
    DOT = "dotCase"


_SEPARATORS = re.compile(r"[-_.\s]+")
# Every uppercase letter opens a new word.
_EACH_UPPERCASE = re.compile(r"[A-Z][^A-Z]*|[^A-Z]+")
# A run of uppercase letters is one word (HTTPServer -> HTTP, Server).
_UPPERCASE_RUNS = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]+(?![a-z])|[A-Z]?[^A-Z]+")


def split_words(key: str, *, preserve_consecutive_uppercase: bool = False) -> list[str]:
    """Split an identifier into its words."""

    pattern = _UPPERCASE_RUNS if preserve_consecutive_uppercase else _EACH_UPPERCASE
    words: list[str] = []
    for chunk in _SEPARATORS.split(key):
        if not chunk:
            continue
        if chunk.isupper() or chunk.islower():
            words.append(chunk)
            continue
        words.extend(pattern.findall(chunk))
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def _camel(words: list[str]) -> str:
    return words[0].lower() + "".join(_capitalize(word) for word in words[1:])


_JOINERS: dict[CaseType, Callable[[list[str]], str]] = {
    CaseType.CAMEL: _camel,
    CaseType.SNAKE: lambda words: "_".join(word.lower() for word in words),
    CaseType.KEBAB: lambda words: "-".join(word.lower() for word in words),
    CaseType.PASCAL: lambda words: "".join(_capitalize(word) for word in words),
    CaseType.SCREAMING_SNAKE: lambda words: "_".join(word.upper() for word in words),
    CaseType.DOT: lambda words: ".".join(word.lower() for word in words),
}


class CaseConverter:
    """Re-keys mappings to a single target case."""

    def __init__(
        self,
        target_case: CaseType | str,
        *,
        preserve_specific_keys: Iterable[str] = (),
        preserve_consecutive_uppercase: bool = False,
    ) -> None:
        self.target_case = CaseType(target_case)
        self.preserve_specific_keys = frozenset(preserve_specific_keys)
        self.preserve_consecutive_uppercase = preserve_consecutive_uppercase

    def convert_key(self, key: str) -> str:
        if key in self.preserve_specific_keys:
            return key
        words = split_words(key, preserve_consecutive_uppercase=self.preserve_consecutive_uppercase)
        if not words:
            return key
        return _JOINERS[self.target_case](words)

    def _convert_value(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return self._convert_mapping(value)
        if isinstance(value, list):
            return [self._convert_value(item) for item in value]
        return value

    def _convert_mapping(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {
            self.convert_key(key) if isinstance(key, str) else key: self._convert_value(value)
            for key, value in data.items()
        }

    def execute(self, data: Mapping[str, Any]) -> dict[str, Any]:
        if not isinstance(data, Mapping):
            raise InvalidInputError("Input must be an object")
        return self._convert_mapping(data)


def convert_case(
    data: Mapping[str, Any],
    target_case: CaseType | str,
    *,
    preserve_specific_keys: Iterable[str] = (),
    preserve_consecutive_uppercase: bool = False,
) -> dict[str, Any]:
    """Return a copy of ``data`` with every key converted to ``target_case``."""

    converter = CaseConverter(
        target_case,
        preserve_specific_keys=preserve_specific_keys,
        preserve_consecutive_uppercase=preserve_consecutive_uppercase,
    )
    return converter.execute(data)
