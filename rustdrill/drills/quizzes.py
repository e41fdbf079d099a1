"""Small quizzes: apple prices, a string transformer and report cards."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterable


def calculate_price_of_apples(amount: int) -> int:
    """Two per apple, or one per apple when buying more than 40."""
    factor = 1 if amount > 40 else 2
    return factor * amount


class Action(enum.Enum):
    """What a Command does to its string."""

    UPPERCASE = "uppercase"
    TRIM = "trim"
    APPEND = "append"


@dataclass(frozen=True)
class Command:
    """An operation to apply to a string; APPEND adds "bar" `times` times."""

    action: Action
    times: int = 0

    def __post_init__(self) -> None:
        if self.times < 0:
            raise ValueError("append count must not be negative")

    @classmethod
    def uppercase(cls) -> Command:
        return cls(Action.UPPERCASE)

    @classmethod
    def trim(cls) -> Command:
        return cls(Action.TRIM)

    @classmethod
    def append(cls, times: int) -> Command:
        return cls(Action.APPEND, times)

    def apply(self, text: str) -> str:
        """The string transformed by this command."""
        match self.action:
            case Action.UPPERCASE:
                return text.upper()
            case Action.TRIM:
                return text.strip()
            case Action.APPEND:
                return text + "bar" * self.times
        raise ValueError(f"unknown action {self.action!r}")


def transformer(items: Iterable[tuple[str, Command]]) -> list[str]:
    """Apply each command to its string, keeping the order."""
    return [command.apply(text) for text, command in items]


@dataclass
class ReportCard:
    """A student's report card with a numeric or alphabetic grade."""

    grade: Any
    student_name: str
    student_age: int

    def __post_init__(self) -> None:
        if not 0 <= self.student_age <= 255:
            raise ValueError("student age must be between 0 and 255")

    def render(self) -> str:
        """One-line summary of the report card."""
        return (
            f"{self.student_name} ({self.student_age}) - "
            f"achieved a grade of {self.grade}"
        )