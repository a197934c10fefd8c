"""
flatstore Core - Document model.

A document is the parsed JSON root: either an array of tables (positional
identifiers) or an object of tables (named identifiers). A table is an array
of records; a record is a schema-free dict.
"""

import math
from typing import Any

from flatstore.exceptions import InvalidRecordError, UnknownTableError

Record = dict[str, Any]
Table = list[Record]
Document = list[Any] | dict[str, Any]
TableId = int | str

_MISSING = object()


def resolve_table(document: Document, table: TableId) -> Table:
    """
    Return the live table list addressed by ``table``.

    Array documents take non-negative ``int`` positions (a canonical string of
    digits such as ``"7"`` is read as a position). Object documents take ``str`` names.

    Raises:
        UnknownTableError: If no table slot exists for the identifier.
    """
    slot: Any = None
    if isinstance(document, list):
        index = _as_index(table)
        if index is not None and index < len(document):
            slot = document[index]
    elif isinstance(table, str):
        slot = document.get(table)

    if not isinstance(slot, list):
        raise UnknownTableError(table)
    return slot


def _as_index(table: TableId) -> int | None:
    if isinstance(table, bool):
        return None
    if isinstance(table, int):
        return table if table >= 0 else None
    # only canonical positions: "7" yes, "007" no
    if isinstance(table, str) and table.isascii() and table.isdigit() and str(int(table)) == table:
        return int(table)
    return None


def check_json_value(value: Any, where: str = "record") -> None:
    """
    Reject anything that would not survive a JSON round trip unchanged.

    Object keys must be ``str``, floats must be finite, containers must not
    contain themselves.

    Raises:
        InvalidRecordError: Naming the offending location.
    """
    _check(value, where, set())


def _check(value: Any, where: str, seen: set[int]) -> None:
    if value is None or isinstance(value, (bool, int, str)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidRecordError(value, f"{where} holds {value!r}, which JSON cannot represent")
        return
    if not isinstance(value, (dict, list, tuple)):
        raise InvalidRecordError(value, f"{where} holds a {type(value).__name__}, which JSON cannot represent")

    if id(value) in seen:
        raise InvalidRecordError(value, f"{where} contains itself")
    seen.add(id(value))
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidRecordError(value, f"{where} has non-string key {key!r}")
            _check(item, f"{where}.{key}", seen)
    else:
        for i, item in enumerate(value):
            _check(item, f"{where}[{i}]", seen)
    seen.discard(id(value))


def strict_equals(left: Any, right: Any) -> bool:
    """
    Compare two JSON values without type coercion.

    ``"1"`` never equals ``1`` and ``True`` never equals ``1``; ``1`` equals
    ``1.0`` since JSON has a single number type. Arrays and objects compare
    element-wise under the same rules.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(strict_equals(v, right[k]) for k, v in left.items())
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(strict_equals(a, b) for a, b in zip(left, right))
    if type(left) is not type(right):
        return False
    return left == right


def matches(record: Any, key: str, value: Any) -> bool:
    """True if ``record[key]`` exists and strictly equals ``value``."""
    if not isinstance(record, dict):
        return False
    field = record.get(key, _MISSING)
    if field is _MISSING:
        return False
    return strict_equals(field, value)
