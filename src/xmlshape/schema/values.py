"""ValueClassifier: per-slot statistics over observed scalar strings.

Every attribute and every element's character data owns one classifier.
Each observed string is classified into exactly one ``ValueKind`` and the
matching counter is incremented.  After observation, ``kind()`` widens the
set of observed kinds into the single most specific kind that can represent
all of them.

Classification precedence (first match wins):

1. ``INT``    - base-10 integer that fits a signed 64-bit range.
2. ``BOOL``   - one of the canonical boolean literals.
3. ``FLOAT``  - decimal floating point, ``inf``/``infinity``/``nan``.
4. ``TIME``   - strict ``strptime`` match against the configured format.
5. ``STRING`` - anything else.

Integer is checked before boolean, so ``"0"`` and ``"1"`` are integers.
The empty string is ``EMPTY`` and never counts as a distinct kind.

Widening table::

    distinct kinds        result
    --------------        ------
    none                  EMPTY
    exactly one           that kind
    {INT, FLOAT}          FLOAT
    anything else         STRING
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum, auto

__all__ = ["ValueClassifier", "ValueKind", "classify_value", "widen"]

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INT = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)
_FLOAT_SPECIAL = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

_BOOL_LITERALS = frozenset(
    {"1", "t", "T", "TRUE", "true", "True", "0", "f", "F", "FALSE", "false", "False"}
)


class ValueKind(StrEnum):
    """Closed set of scalar categories a slot can resolve to."""

    EMPTY = auto()
    BOOL = auto()
    INT = auto()
    FLOAT = auto()
    TIME = auto()
    STRING = auto()


def _is_int(s: str) -> bool:
    if _INT.fullmatch(s) is None:
        return False
    return _INT64_MIN <= int(s) <= _INT64_MAX


def _is_float(s: str) -> bool:
    if _FLOAT.fullmatch(s) is None:
        return False
    if _FLOAT_SPECIAL.fullmatch(s) is not None:
        return True
    # Finite literals that overflow a double are out of range, not float.
    return float(s) not in (float("inf"), float("-inf"))


def _is_time(s: str, time_format: str) -> bool:
    try:
        parsed = datetime.strptime(s, time_format)
    except ValueError:
        return False
    # strptime accepts unpadded fields; only the exact layout counts.
    return parsed.strftime(time_format) == s


def classify_value(raw: str, time_format: str | None = None) -> ValueKind:
    """Classify one raw string without recording it anywhere."""
    if raw == "":
        return ValueKind.EMPTY
    if _is_int(raw):
        return ValueKind.INT
    if raw in _BOOL_LITERALS:
        return ValueKind.BOOL
    if _is_float(raw):
        return ValueKind.FLOAT
    if time_format and _is_time(raw, time_format):
        return ValueKind.TIME
    return ValueKind.STRING


def widen(kinds: Iterable[ValueKind]) -> ValueKind:
    """Join observed kinds into the most specific common kind."""
    distinct = set(kinds) - {ValueKind.EMPTY}
    if not distinct:
        return ValueKind.EMPTY
    if len(distinct) == 1:
        return distinct.pop()
    if distinct == {ValueKind.INT, ValueKind.FLOAT}:
        return ValueKind.FLOAT
    return ValueKind.STRING


@dataclass(slots=True)
class ValueClassifier:
    """Observed shape of one scalar slot (an attribute or character data).

    Invariant: ``observations`` equals the sum of all six kind counters.

    Attributes:
        observations: Number of values observed.
        empty_count .. string_count: Per-kind counters.
        optional: Slot was absent from at least one occurrence of its owner.
        repeated: Slot appeared more than once within a single occurrence.
    """

    observations: int = 0
    empty_count: int = 0
    bool_count: int = 0
    int_count: int = 0
    float_count: int = 0
    time_count: int = 0
    string_count: int = 0
    optional: bool = False
    repeated: bool = False

    def classify(self, raw: str, time_format: str | None = None) -> ValueKind:
        """Classify ``raw`` and accumulate it into the matching counter."""
        kind = classify_value(raw, time_format)
        self.observations += 1
        if kind is ValueKind.EMPTY:
            self.empty_count += 1
        elif kind is ValueKind.INT:
            self.int_count += 1
        elif kind is ValueKind.BOOL:
            self.bool_count += 1
        elif kind is ValueKind.FLOAT:
            self.float_count += 1
        elif kind is ValueKind.TIME:
            self.time_count += 1
        else:
            self.string_count += 1
        return kind

    def observed_kinds(self) -> set[ValueKind]:
        """Return the set of kinds with a non-zero counter."""
        counts = {
            ValueKind.EMPTY: self.empty_count,
            ValueKind.BOOL: self.bool_count,
            ValueKind.INT: self.int_count,
            ValueKind.FLOAT: self.float_count,
            ValueKind.TIME: self.time_count,
            ValueKind.STRING: self.string_count,
        }
        return {kind for kind, count in counts.items() if count > 0}

    def kind(self) -> ValueKind:
        """Return the widened kind for everything observed so far."""
        return widen(self.observed_kinds())
