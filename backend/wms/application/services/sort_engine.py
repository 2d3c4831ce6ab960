"""Sort engine — stable single-column ordering over mixed field types."""

import re
import unicodedata
from collections.abc import Sequence
from functools import cmp_to_key
from typing import Any

from wms.domain.entities import Record, SortDirection, SortState

_DIGITS = re.compile(r"(\d+)")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _text_key(value: Any) -> tuple:
    """Accent- and case-insensitive key where digit runs compare as numbers.

    "SO-2" sorts before "SO-10", "élan" ties with "Elan".
    """
    text = unicodedata.normalize("NFKD", str(value))
    text = "".join(ch for ch in text if not unicodedata.combining(ch)).casefold()
    return tuple(
        (0, int(chunk)) if chunk.isdigit() else (1, chunk)
        for chunk in _DIGITS.split(text)
        if chunk
    )


def compare_values(a: Any, b: Any, direction: SortDirection = SortDirection.ASC) -> int:
    """Three-way compare; missing values go last whatever the direction."""
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1

    if _is_number(a) and _is_number(b):
        result = (a > b) - (a < b)
    else:
        key_a, key_b = _text_key(a), _text_key(b)
        result = (key_a > key_b) - (key_a < key_b)

    return -result if direction == SortDirection.DESC else result


class SortEngine:
    """Orders filtered records by the active sort column."""

    def sort(self, records: Sequence[Record], state: SortState) -> list[Record]:
        if not state.is_active:
            return list(records)

        column, direction = state.column, state.direction

        def _compare(left: Record, right: Record) -> int:
            return compare_values(left.get(column), right.get(column), direction)

        return sorted(records, key=cmp_to_key(_compare))
