"""Pattern-based semantic detectors for string scalars.

Matchers run in a fixed priority order, most specific first, and the first
one that accepts the text wins:

1. timestamp layouts, in ``TIMESTAMP_LAYOUTS`` order
2. numeric strings (optional sign, digits, at most one decimal point)

Numeric-looking strings stay ``StringType``; they only carry a rendering hint
so identifiers such as zip codes keep their leading zeros.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from typeforge.inference.nodes import SchemaNode, StringType, TimestampType

_MONTH_ABBREVIATIONS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

_DATE = r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
_CLOCK = r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.\d{1,9})?"
_NUMERIC_STRING_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")


class SemanticKind(str, Enum):
    TIMESTAMP = "timestamp"
    NUMERIC_STRING = "numeric_string"


@dataclass(frozen=True, slots=True)
class TimestampLayout:
    """One accepted textual timestamp layout."""

    name: str
    example: str
    pattern: re.Pattern[str]

    def matches(self, text: str) -> bool:
        match = self.pattern.match(text)
        if match is None:
            return False
        return _valid_calendar_fields(match.groupdict())


@dataclass(frozen=True, slots=True)
class SemanticMatch:
    kind: SemanticKind
    layout: str | None = None


TIMESTAMP_LAYOUTS: tuple[TimestampLayout, ...] = (
    TimestampLayout(
        name="rfc3339",
        example="2006-01-02T15:04:05Z",
        pattern=re.compile(rf"^{_DATE}T{_CLOCK}(?:Z|[+-]\d{{2}}:\d{{2}})$", re.IGNORECASE),
    ),
    TimestampLayout(
        name="iso8601_local",
        example="2006-01-02T15:04:05",
        pattern=re.compile(rf"^{_DATE}T{_CLOCK}(?:[+-]\d{{4}})?$", re.IGNORECASE),
    ),
    TimestampLayout(
        name="sql_datetime",
        example="2006-01-02 15:04:05",
        pattern=re.compile(rf"^{_DATE} {_CLOCK}(?: ?(?:Z|UTC|[+-]\d{{2}}(?::?\d{{2}})?))?$"),
    ),
    TimestampLayout(
        name="rfc1123",
        example="Mon, 02 Jan 2006 15:04:05 MST",
        pattern=re.compile(
            r"^(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun), (?P<day>\d{2}) (?P<month_name>[A-Za-z]{3}) (?P<year>\d{4}) "
            rf"{_CLOCK} (?:[A-Z]{{3,4}}|[+-]\d{{4}})$"
        ),
    ),
    TimestampLayout(
        name="date",
        example="2006-01-02",
        pattern=re.compile(rf"^{_DATE}$"),
    ),
)

TIMESTAMP_LAYOUT_NAMES: tuple[str, ...] = tuple(layout.name for layout in TIMESTAMP_LAYOUTS)


def layouts_by_name(names: Sequence[str]) -> tuple[TimestampLayout, ...]:
    """Select layouts by name, keeping the built-in priority order."""

    unknown = sorted(set(names) - set(TIMESTAMP_LAYOUT_NAMES))
    if unknown:
        raise ValueError(f"Unknown timestamp layouts: {', '.join(unknown)}")
    wanted = set(names)
    return tuple(layout for layout in TIMESTAMP_LAYOUTS if layout.name in wanted)


class SemanticDetector:
    """Classifies string literals into the most specific semantic type."""

    def __init__(self, layouts: Sequence[TimestampLayout] | None = None) -> None:
        self._layouts = tuple(TIMESTAMP_LAYOUTS if layouts is None else layouts)

    @property
    def layouts(self) -> tuple[TimestampLayout, ...]:
        return self._layouts

    def detect(self, text: str) -> SemanticMatch | None:
        for layout in self._layouts:
            if layout.matches(text):
                return SemanticMatch(kind=SemanticKind.TIMESTAMP, layout=layout.name)
        if _NUMERIC_STRING_RE.match(text):
            return SemanticMatch(kind=SemanticKind.NUMERIC_STRING)
        return None

    def classify(self, text: str) -> SchemaNode:
        match = self.detect(text)
        if match is None:
            return StringType()
        if match.kind is SemanticKind.TIMESTAMP:
            return TimestampType()
        return StringType(numeric_hint=True)


def _valid_calendar_fields(groups: dict[str, str | None]) -> bool:
    month_name = groups.get("month_name")
    if month_name is not None:
        month = _MONTH_ABBREVIATIONS.get(month_name.lower())
        if month is None:
            return False
    else:
        month = int(groups["month"] or 0)
    hour = int(groups.get("hour") or 0)
    minute = int(groups.get("minute") or 0)
    second = int(groups.get("second") or 0)
    # Leap seconds are written as :60.
    if second == 60:
        second = 59
    try:
        datetime(int(groups["year"] or 0), month, int(groups["day"] or 0), hour, minute, second)
    except ValueError:
        return False
    return True
