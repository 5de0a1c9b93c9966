"""Character Store holding the in-memory collection of character records.

Provides:
- Seed characters present whenever a new store is built
- CharacterStore with list/get/create/replace/delete operations
- Loose numeric conversion and strict equality used when matching ids
  and checking the level range

Records are plain dicts holding only the character fields that were
supplied. An absent field is different from an explicit ``None``: the
first never matches anything but another absent field, the second
converts to ``0`` in the level check.
"""

import math
import re
import threading
from collections.abc import Iterable, Mapping
from copy import deepcopy
from enum import Enum
from typing import Any

from result import Err, Ok, Result

from character_api.utils.logging import get_logger

logger = get_logger(__name__)

CharacterRecord = dict[str, Any]

CHARACTER_FIELDS: tuple[str, ...] = ("id", "name", "job", "weapon", "level")

MIN_LEVEL = 1
MAX_LEVEL = 99

# Stands in for a field the payload did not carry
MISSING: Any = object()

CLOUD_STRIFE: CharacterRecord = {
    "id": 1,
    "name": "Cloud Strife",
    "job": "Soldier",
    "weapon": "Buster sword",
    "level": 25,
}

TIFA_LOCKHART: CharacterRecord = {
    "id": 2,
    "name": "Tifa Lockhart",
    "job": "Fighter",
    "weapon": "Leather gloves",
    "level": 22,
}

AERITH_GAINSBOROUGH: CharacterRecord = {
    "id": 3,
    "name": "Aerith Gainsborough",
    "job": "Mage",
    "weapon": "Magic staff",
    "level": 20,
}

SEED_CHARACTERS: tuple[CharacterRecord, ...] = (
    CLOUD_STRIFE,
    TIFA_LOCKHART,
    AERITH_GAINSBOROUGH,
)


class CharacterError(Enum):
    """Error types for character store operations.

    Values are the messages returned to API clients.
    """

    BODY_EMPTY = "Body is empty"
    DUPLICATE = "ID or name already exists"
    LEVEL_OUT_OF_RANGE = "Level must be between 1 and 99"
    NOT_FOUND = "Character not found"
    DOES_NOT_EXIST = "Character does not exist"


_DECIMAL_LITERAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_PREFIXED_LITERAL = re.compile(r"^0([xXoObB])([0-9a-zA-Z]+)$")
_PREFIX_BASES = {"x": 16, "o": 8, "b": 2}


def _list_text(items: list) -> str:
    """Render a list as comma-joined text, null items as empty strings."""
    parts = []
    for item in items:
        if item is None:
            parts.append("")
        elif isinstance(item, bool):
            parts.append("true" if item else "false")
        elif isinstance(item, list):
            parts.append(_list_text(item))
        elif isinstance(item, dict):
            parts.append("[object Object]")
        elif isinstance(item, float) and math.isnan(item):
            parts.append("NaN")
        elif isinstance(item, float) and math.isinf(item):
            parts.append("-Infinity" if item < 0 else "Infinity")
        else:
            parts.append(str(item))
    return ",".join(parts)


def to_number(value: Any) -> int | float:
    """Convert a value to a number the way a loosely typed comparison would.

    - absent values, objects and unparseable strings become NaN
    - ``None`` and blank strings become 0
    - booleans become 0 or 1
    - lists are joined with commas first, so ``[]`` is 0, ``[100]`` is 100
      and ``[1, 2]`` is NaN
    - numeric strings (decimal, exponent, 0x/0o/0b, Infinity) are parsed,
      integral results come back as ``int``
    """
    if value is MISSING:
        return math.nan
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, list):
        return to_number(_list_text(value))
    if not isinstance(value, str):
        return math.nan

    text = value.strip()
    if not text:
        return 0
    if text in ("Infinity", "+Infinity"):
        return math.inf
    if text == "-Infinity":
        return -math.inf
    if _DECIMAL_LITERAL.match(text):
        number = float(text)
        return int(number) if number.is_integer() else number

    prefixed = _PREFIXED_LITERAL.match(text)
    if prefixed:
        try:
            return int(prefixed.group(2), _PREFIX_BASES[prefixed.group(1).lower()])
        except ValueError:
            return math.nan
    return math.nan


def strict_equals(left: Any, right: Any) -> bool:
    """Compare two field values without any type conversion.

    Numbers only equal numbers, strings only strings, booleans only
    booleans. NaN equals nothing. Containers compare by identity.
    """
    if left is MISSING or right is MISSING or left is None or right is None:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return left is right


def level_in_range(level: Any) -> bool:
    """Return False only when the level compares below 1 or above 99.

    Values that convert to NaN fail both comparisons and are accepted.
    """
    number = to_number(level)
    return not (number < MIN_LEVEL or number > MAX_LEVEL)


def field(record: Mapping[str, Any], name: str) -> Any:
    """Return a record field, or MISSING when the record does not carry it."""
    return record.get(name, MISSING)


def build_record(payload: Mapping[str, Any]) -> CharacterRecord:
    """Keep only the character fields of a payload, values untouched."""
    return {
        name: deepcopy(payload[name]) for name in CHARACTER_FIELDS if name in payload
    }


class CharacterStore:
    """In-memory, ordered collection of character records.

    Each operation holds a single lock for its whole read-modify-write
    sequence. Records handed out are copies; callers cannot mutate the
    stored collection through them.
    """

    def __init__(self, characters: Iterable[Mapping[str, Any]] | None = None) -> None:
        source = SEED_CHARACTERS if characters is None else characters
        self._characters: list[CharacterRecord] = [deepcopy(dict(c)) for c in source]
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._characters)

    def _find_index(self, character_id: Any) -> int | None:
        for index, character in enumerate(self._characters):
            if strict_equals(field(character, "id"), character_id):
                return index
        return None

    def list_characters(self) -> list[CharacterRecord]:
        """Return all characters in collection order."""
        with self._lock:
            return deepcopy(self._characters)

    def get_character(
        self, character_id: Any
    ) -> Result[CharacterRecord, CharacterError]:
        """Return the first character whose id matches ``character_id``.

        ``character_id`` is converted with `to_number`, so path strings
        such as ``"2"`` match the stored integer 2.
        """
        target = to_number(character_id)
        with self._lock:
            index = self._find_index(target)
            if index is None:
                return Err(CharacterError.NOT_FOUND)
            return Ok(deepcopy(self._characters[index]))

    def create_character(
        self, payload: Mapping[str, Any] | None
    ) -> Result[None, CharacterError]:
        """Validate a payload and append it as a new character.

        Checks run in order: empty payload, id OR name clash with any
        existing character, level range.
        """
        if not payload:
            return Err(CharacterError.BODY_EMPTY)

        record = build_record(payload)
        with self._lock:
            exists = any(
                strict_equals(field(c, "id"), field(record, "id"))
                or strict_equals(field(c, "name"), field(record, "name"))
                for c in self._characters
            )
            if exists:
                return Err(CharacterError.DUPLICATE)

            if not level_in_range(field(record, "level")):
                return Err(CharacterError.LEVEL_OUT_OF_RANGE)

            self._characters.append(record)

        logger.info(f"Created character id={field(record, 'id')!r}")
        return Ok(None)

    def replace_character(
        self, character_id: Any, payload: Mapping[str, Any] | None
    ) -> Result[None, CharacterError]:
        """Replace the character matching ``character_id`` with ``payload``.

        This is a full replace: fields absent from the payload are absent
        from the stored record afterwards. The record keeps its position
        and may take a new id. Clashes are checked against every character
        whose id differs from ``character_id``.
        """
        if not payload:
            return Err(CharacterError.BODY_EMPTY)

        target = to_number(character_id)
        record = build_record(payload)
        with self._lock:
            index = self._find_index(target)
            if index is None:
                return Err(CharacterError.DOES_NOT_EXIST)

            duplicate = any(
                (
                    strict_equals(field(c, "id"), field(record, "id"))
                    or strict_equals(field(c, "name"), field(record, "name"))
                )
                and not strict_equals(field(c, "id"), target)
                for c in self._characters
            )
            if duplicate:
                return Err(CharacterError.DUPLICATE)

            if not level_in_range(field(record, "level")):
                return Err(CharacterError.LEVEL_OUT_OF_RANGE)

            self._characters[index] = record

        logger.info(
            f"Replaced character id={target!r} with id={field(record, 'id')!r}"
        )
        return Ok(None)

    def delete_character(self, character_id: Any) -> Result[None, CharacterError]:
        """Remove the first character whose id matches ``character_id``."""
        target = to_number(character_id)
        with self._lock:
            index = self._find_index(target)
            if index is None:
                return Err(CharacterError.DOES_NOT_EXIST)
            del self._characters[index]

        logger.info(f"Deleted character id={target!r}")
        return Ok(None)

    def append_unchecked(self, record: Mapping[str, Any]) -> None:
        """Append a record with no validation or uniqueness checks."""
        with self._lock:
            self._characters.append(build_record(record))
