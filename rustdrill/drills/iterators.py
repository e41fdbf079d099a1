"""Working with iterables: capitalising, dividing, factorials and counting."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Iterable, Mapping

_U64_MAX = 2**64 - 1
_NUMBERS = (27, 297, 38502, 81)
_DIVISOR = 27


def capitalize_first(text: str) -> str:
    """Upper-case the first character of text."""
    return text[:1].upper() + text[1:]


def capitalize_words_vector(words: Iterable[str]) -> list[str]:
    """Capitalise each word."""
    return [capitalize_first(word) for word in words]


def capitalize_words_string(words: Iterable[str]) -> str:
    """Capitalise each word and concatenate the results."""
    return "".join(capitalize_first(word) for word in words)


@dataclass(frozen=True)
class NotDivisibleError:
    """Details of a division that leaves a remainder."""

    dividend: int
    divisor: int


class DivisionError(Exception):
    """A division could not be carried out exactly."""

    class Kind(enum.Enum):
        NOT_DIVISIBLE = "not divisible"
        DIVIDE_BY_ZERO = "divide by zero"

    def __init__(
        self, kind: DivisionError.Kind, details: NotDivisibleError | None = None
    ) -> None:
        message = kind.value
        if details is not None:
            message = f"{details.dividend} is not divisible by {details.divisor}"
        super().__init__(message)
        self.kind = kind
        self.details = details

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DivisionError):
            return NotImplemented
        return (self.kind, self.details) == (other.kind, other.details)

    def __hash__(self) -> int:
        return hash((self.kind, self.details))


def divide(a: int, b: int) -> int:
    """a divided by b when the division is exact; DivisionError otherwise."""
    if b == 0:
        raise DivisionError(DivisionError.Kind.DIVIDE_BY_ZERO)
    if a % b != 0:
        raise DivisionError(DivisionError.Kind.NOT_DIVISIBLE, NotDivisibleError(a, b))
    return a // b


def result_with_list() -> list[int]:
    """All quotients of the sample numbers, or the first DivisionError raised."""
    return [divide(n, _DIVISOR) for n in _NUMBERS]


def _attempt(n: int) -> int | DivisionError:
    try:
        return divide(n, _DIVISOR)
    except DivisionError as err:
        return err


def list_of_results() -> list[int | DivisionError]:
    """Each quotient of the sample numbers, or the error in its place."""
    return [_attempt(n) for n in _NUMBERS]


def factorial(num: int) -> int:
    """num! for an unsigned 64-bit result."""
    if num < 0:
        raise ValueError("factorial is only defined for non-negative numbers")
    result = math.prod(range(1, num + 1))
    if result > _U64_MAX:
        raise OverflowError("factorial does not fit in 64 bits")
    return result


class Progress(enum.Enum):
    """How far an exercise has been worked through."""

    NONE = "none"
    SOME = "some"
    COMPLETE = "complete"


def count_iterator(progress_map: Mapping[str, Progress], value: Progress) -> int:
    """Number of entries in the map with the given progress."""
    return sum(1 for progress in progress_map.values() if progress is value)


def count_collection_iterator(
    collection: Iterable[Mapping[str, Progress]], value: Progress
) -> int:
    """Number of entries across all maps with the given progress."""
    return sum(count_iterator(progress_map, value) for progress_map in collection)