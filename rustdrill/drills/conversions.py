"""Conversions between strings, numbers and small value types."""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

_USIZE_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_usize(text: str) -> int:
    """Parse an unsigned machine-sized integer, rejecting signs, spaces and underscores."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _UNSIGNED.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > _USIZE_MAX:
        raise ValueError("number too large to fit in target type")
    return value


def byte_counter(arg: str) -> int:
    """Number of bytes in the UTF-8 encoding of arg."""
    return len(arg.encode("utf-8"))


def char_counter(arg: str) -> int:
    """Number of characters in arg."""
    return len(arg)


def average(values: Iterable[float]) -> float:
    """Arithmetic mean of values; NaN for an empty input."""
    items = list(values)
    if not items:
        return math.nan
    return sum(items, 0.0) / len(items)


@dataclass
class Person:
    """A named person with an age; defaults to 30-year-old John."""

    name: str = "John"
    age: int = 30


def person_from_text(text: str) -> Person:
    """Build a Person from "name,age", falling back to the default Person."""
    parts = text.split(",")
    if len(parts) == 2:
        name, age = parts
        if name:
            try:
                return Person(name, _parse_usize(age))
            except ValueError:
                pass
    return Person()


class ParsePersonError(Exception):
    """A "name,age" string could not be parsed into a Person."""

    class Kind(enum.Enum):
        EMPTY = "empty input string"
        BAD_LEN = "incorrect number of fields"
        NO_NAME = "empty name field"
        PARSE_INT = "invalid age"

    def __init__(self, kind: ParsePersonError.Kind, detail: str | None = None) -> None:
        message = kind.value if detail is None else f"{kind.value}: {detail}"
        super().__init__(message)
        self.kind = kind


def parse_person(text: str) -> Person:
    """Parse "name,age" strictly; raise ParsePersonError on any problem."""
    parts = text.split(",")
    match parts:
        case [name, age]:
            if not name:
                raise ParsePersonError(ParsePersonError.Kind.NO_NAME)
            try:
                return Person(name, _parse_usize(age))
            except ValueError as err:
                raise ParsePersonError(ParsePersonError.Kind.PARSE_INT, str(err)) from err
        case [name]:
            if not name:
                raise ParsePersonError(ParsePersonError.Kind.EMPTY)
            raise ParsePersonError(ParsePersonError.Kind.BAD_LEN)
        case _:
            raise ParsePersonError(ParsePersonError.Kind.BAD_LEN)


class IntoColorError(Exception):
    """A sequence of integers could not be turned into a Color."""

    class Kind(enum.Enum):
        BAD_LEN = "incorrect length"
        INT_CONVERSION = "component out of range"

    def __init__(self, kind: IntoColorError.Kind) -> None:
        super().__init__(kind.value)
        self.kind = kind


def _component(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"color component must be an int, not {type(value).__name__}")
    if not 0 <= value <= 255:
        raise IntoColorError(IntoColorError.Kind.INT_CONVERSION)
    return value


@dataclass(frozen=True)
class Color:
    """An RGB colour with components in 0..=255."""

    red: int
    green: int
    blue: int

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> Color:
        """Build a Color from exactly three integers in range."""
        items = list(values)
        if len(items) != 3:
            raise IntoColorError(IntoColorError.Kind.BAD_LEN)
        red, green, blue = (_component(v) for v in items)
        return cls(red, green, blue)