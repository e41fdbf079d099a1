"""Basic drills: strings, packages, options, messages, lists and branching."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


def trim_me(text: str) -> str:
    """Remove whitespace from both ends."""
    return text.strip()


def compose_me(text: str) -> str:
    """Append " world!"."""
    return text + " world!"


def replace_me(text: str) -> str:
    """Replace every "cars" with "balloons"."""
    return text.replace("cars", "balloons")


@dataclass
class Package:
    """A parcel sent between two countries."""

    sender_country: str
    recipient_country: str
    weight_in_grams: int

    def __post_init__(self) -> None:
        if self.weight_in_grams <= 0:
            raise ValueError("Can not ship a weightless package.")

    def is_international(self) -> bool:
        return self.sender_country != self.recipient_country

    def get_fees(self, cents_per_gram: int) -> int:
        return self.weight_in_grams * cents_per_gram


def maybe_icecream(time_of_day: int) -> int | None:
    """Ice cream left at a given hour: 5 before 22, 0 until midnight, None for bad hours."""
    if time_of_day < 0:
        raise ValueError("time of day must not be negative")
    if time_of_day <= 21:
        return 5
    if time_of_day <= 23:
        return 0
    return None


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class ChangeColor:
    red: int
    green: int
    blue: int


@dataclass(frozen=True)
class Echo:
    text: str


@dataclass(frozen=True)
class Move:
    point: Point


@dataclass(frozen=True)
class Quit:
    pass


Message = ChangeColor | Echo | Move | Quit


@dataclass
class MessageState:
    """State that changes as messages are processed."""

    color: tuple[int, int, int] = (0, 0, 0)
    position: Point = field(default_factory=lambda: Point(0, 0))
    quit: bool = False

    def process(self, message: Message) -> None:
        """Apply one message to the state."""
        match message:
            case ChangeColor(red, green, blue):
                # Components are truncated to a byte.
                self.color = (red & 0xFF, green & 0xFF, blue & 0xFF)
            case Echo(text):
                print(text)
            case Move(point):
                self.position = point
            case Quit():
                self.quit = True
            case _:
                raise TypeError(f"unknown message {message!r}")


def vec_loop(values: list[int]) -> list[int]:
    """Each value doubled."""
    doubled = []
    for value in values:
        doubled.append(value * 2)
    return doubled


def vec_map(values: Iterable[int]) -> list[int]:
    """Each value doubled, built with a comprehension."""
    return [value * 2 for value in values]


def bigger(a: int, b: int) -> int:
    return a if a > b else b


def foo_if_fizz(fizzish: str) -> str:
    if fizzish == "fizz":
        return "foo"
    if fizzish == "fuzz":
        return "bar"
    return "baz"


def is_even(num: int) -> bool:
    return num % 2 == 0


@dataclass(frozen=True)
class Rectangle:
    """A rectangle with strictly positive sides."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Rectangle width and height cannot be negative!")