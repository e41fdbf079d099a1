"""Counting things with dictionaries: fruit baskets and football score tables."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import MutableMapping

_U8_MAX = 255
_GOALS = re.compile(r"\+?[0-9]+")


def fruit_basket() -> dict[str, int]:
    """A basket holding at least three kinds of fruit and at least five pieces."""
    return {"banana": 2, "apple": 3, "orange": 1}


class Fruit(enum.Enum):
    """Kinds of fruit that go into the fruit cake."""

    APPLE = "apple"
    BANANA = "banana"
    MANGO = "mango"
    LYCHEE = "lychee"
    PINEAPPLE = "pineapple"


def fill_fruit_basket(basket: MutableMapping[Fruit, int]) -> None:
    """Add one of every kind of fruit that is not in the basket yet."""
    for fruit in Fruit:
        basket.setdefault(fruit, 1)


def _parse_goals(text: str) -> int:
    if not _GOALS.fullmatch(text):
        raise ValueError(f"invalid goal count {text!r}")
    value = int(text)
    if value > _U8_MAX:
        raise ValueError(f"goal count {text!r} is too large")
    return value


@dataclass
class Team:
    """A team with the goals it scored and conceded."""

    name: str
    goals_scored: int = 0
    goals_conceded: int = 0

    def _record(self, scored: int, conceded: int) -> None:
        scored_total = self.goals_scored + scored
        conceded_total = self.goals_conceded + conceded
        if scored_total > _U8_MAX or conceded_total > _U8_MAX:
            raise OverflowError(f"goal totals of {self.name} are too large")
        self.goals_scored = scored_total
        self.goals_conceded = conceded_total


def build_scores_table(results: str) -> dict[str, Team]:
    """Build a table of teams from lines of "team1,team2,goals1,goals2"."""
    scores: dict[str, Team] = {}
    for line in results.splitlines():
        fields = line.split(",")
        if len(fields) < 4:
            raise ValueError(f"malformed result line {line!r}")
        team_1_name, team_2_name = fields[0], fields[1]
        team_1_score = _parse_goals(fields[2])
        team_2_score = _parse_goals(fields[3])
        scores.setdefault(team_1_name, Team(team_1_name))._record(
            team_1_score, team_2_score
        )
        scores.setdefault(team_2_name, Team(team_2_name))._record(
            team_2_score, team_1_score
        )
    return scores