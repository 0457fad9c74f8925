"""Format-agnostic raw value tree produced by the sample adapters."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from typeforge.errors import MalformedInputError


@dataclass(frozen=True, slots=True)
class RawNull:
    """Explicit null."""


@dataclass(frozen=True, slots=True)
class RawBool:
    value: bool


@dataclass(frozen=True, slots=True)
class RawNumber:
    """Numeric literal; an ``int`` value is integral, a ``float`` value is not."""

    value: int | float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise MalformedInputError(f"RawNumber requires an int or float, got {type(self.value).__name__}")
        if isinstance(self.value, float) and not math.isfinite(self.value):
            raise MalformedInputError(f"Non-finite number is not representable: {self.value!r}")

    @property
    def is_integral(self) -> bool:
        return isinstance(self.value, int)


@dataclass(frozen=True, slots=True)
class RawString:
    value: str


@dataclass(frozen=True, slots=True)
class RawArray:
    items: tuple[RawValue, ...] = ()


@dataclass(frozen=True, slots=True)
class RawObject:
    """Ordered mapping of field name to value."""

    fields: tuple[tuple[str, RawValue], ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for name, _ in self.fields:
            if name in seen:
                raise MalformedInputError(f"Duplicate object field name: {name!r}")
            seen.add(name)

    def keys(self) -> list[str]:
        return [name for name, _ in self.fields]

    def get(self, name: str) -> RawValue | None:
        return next((value for key, value in self.fields if key == name), None)


RawValue = Union[RawNull, RawBool, RawNumber, RawString, RawArray, RawObject]
