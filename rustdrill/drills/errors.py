"""Reporting failures with exceptions: name tags, token costs and positive integers."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

_SIGNED = re.compile(r"[+-]?[0-9]+")
_PROCESSING_FEE = 1
_COST_PER_ITEM = 5


def _parse_int(text: str, bits: int) -> int:
    """Parse a signed integer of the given width, with the usual strict rules."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _SIGNED.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    upper = 2 ** (bits - 1) - 1
    if value > upper:
        raise ValueError("number too large to fit in target type")
    if value < -upper - 1:
        raise ValueError("number too small to fit in target type")
    return value


def generate_nametag_text(name: str) -> str:
    """Text for a name tag; raise ValueError when the name is empty."""
    if not name:
        raise ValueError("`name` was empty; it must be nonempty.")
    return f"Hi! My name is {name}"


def total_cost(item_quantity: str) -> int:
    """Token cost of buying the typed quantity of items, fee included.

    Raises ValueError when the quantity is not a valid 32-bit integer.
    """
    quantity = _parse_int(item_quantity, 32)
    cost = quantity * _COST_PER_ITEM + _PROCESSING_FEE
    if not -(2**31) <= cost <= 2**31 - 1:
        raise OverflowError("arithmetic overflow while computing the cost")
    return cost


class CreationError(Exception):
    """A PositiveNonzeroInteger could not be created."""

    class Kind(enum.Enum):
        NEGATIVE = "number is negative"
        ZERO = "number is zero"

    def __init__(self, kind: CreationError.Kind) -> None:
        super().__init__(kind.value)
        self.kind = kind


@dataclass(frozen=True)
class PositiveNonzeroInteger:
    """An integer strictly greater than zero."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise CreationError(CreationError.Kind.NEGATIVE)
        if self.value == 0:
            raise CreationError(CreationError.Kind.ZERO)


class ParsePosNonzeroError(Exception):
    """Text could not be turned into a PositiveNonzeroInteger."""

    class Kind(enum.Enum):
        CREATION = "creation"
        PARSE_INT = "parse int"

    def __init__(
        self, kind: ParsePosNonzeroError.Kind, cause: CreationError | ValueError
    ) -> None:
        super().__init__(str(cause))
        self.kind = kind
        self.cause = cause


def parse_pos_nonzero(s: str) -> PositiveNonzeroInteger:
    """Parse a 64-bit integer and check that it is positive."""
    try:
        value = _parse_int(s, 64)
    except ValueError as err:
        raise ParsePosNonzeroError(ParsePosNonzeroError.Kind.PARSE_INT, err) from err
    try:
        return PositiveNonzeroInteger(value)
    except CreationError as err:
        raise ParsePosNonzeroError(ParsePosNonzeroError.Kind.CREATION, err) from err