from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from scorecall.exceptions import (
    InvalidScoreStateError,
    InvalidSideError,
    UnsupportedSportError,
)


SIDES: Tuple[str, ...] = ("A", "B")


class Sport(str, Enum):
    TENNIS = "tennis"
    PICKLEBALL = "pickleball"

    @staticmethod
    def parse(value: Any) -> "Sport":
        if isinstance(value, Sport):
            return value
        try:
            return Sport(str(value).strip().lower())
        except ValueError:
            raise UnsupportedSportError(f"Unsupported sport: {value!r}") from None


class TennisPoint(str, Enum):
    LOVE = "0"
    FIFTEEN = "15"
    THIRTY = "30"
    FORTY = "40"
    ADVANTAGE = "Advantage"
    GAME = "Game"

    def __str__(self) -> str:
        return self.value

    def __format__(self, format_spec: str) -> str:
        return format(self.value, format_spec)


# Tennis states carry TennisPoint members, pickleball states carry ints.
Score = Union[TennisPoint, int]


def validate_side(side: Any) -> str:
    if side not in SIDES:
        raise InvalidSideError(f"Invalid side: {side!r}")
    return side


def other_side(side: str) -> str:
    return "B" if validate_side(side) == "A" else "A"


def zero_score(sport: Sport) -> Score:
    if sport is Sport.TENNIS:
        return TennisPoint.LOVE
    if sport is Sport.PICKLEBALL:
        return 0
    raise UnsupportedSportError(f"Unsupported sport: {sport!r}")


def _check_score(sport: Sport, value: Any, label: str) -> None:
    if sport is Sport.TENNIS:
        if not isinstance(value, TennisPoint):
            raise InvalidScoreStateError(f"{label} must be a TennisPoint, got {value!r}")
        if value is TennisPoint.GAME:
            raise InvalidScoreStateError(f"{label} cannot hold 'Game'")
    elif sport is Sport.PICKLEBALL:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidScoreStateError(f"{label} must be an int, got {value!r}")
        if value < 0:
            raise InvalidScoreStateError(f"{label} must be non-negative")
    else:
        raise UnsupportedSportError(f"Unsupported sport: {sport!r}")


def score_to_json(value: Score) -> Union[str, int]:
    if isinstance(value, TennisPoint):
        return value.value
    return value


def score_from_json(sport: Sport, raw: Any) -> Score:
    try:
        if sport is Sport.TENNIS:
            return TennisPoint(raw if isinstance(raw, str) else str(raw))
        if isinstance(raw, bool):
            raise ValueError(raw)
        return int(raw)
    except (TypeError, ValueError):
        raise InvalidScoreStateError(f"Invalid {sport.value} score: {raw!r}") from None


def bool_from_json(raw: Any, label: str) -> bool:
    if not isinstance(raw, bool):
        raise InvalidScoreStateError(f"{label} must be a bool, got {raw!r}")
    return raw


# =========================================================
# LEDGER ENTRY
# =========================================================

@dataclass(frozen=True)
class GamePoint:
    timestamp: int
    team_a_score: Score
    team_b_score: Score
    team_a_serving: bool
    game: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "team_a_score": score_to_json(self.team_a_score),
            "team_b_score": score_to_json(self.team_b_score),
            "team_a_serving": self.team_a_serving,
            "game": self.game,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any], sport: Sport) -> "GamePoint":
        return GamePoint(
            timestamp=int(d["timestamp"]),
            team_a_score=score_from_json(sport, d["team_a_score"]),
            team_b_score=score_from_json(sport, d["team_b_score"]),
            team_a_serving=bool_from_json(d.get("team_a_serving", True), "team_a_serving"),
            game=int(d["game"]),
        )


def _points_from_list(raw: Any, sport: Sport) -> Tuple[GamePoint, ...]:
    return tuple(GamePoint.from_dict(p, sport) for p in (raw or []))


# =========================================================
# IN-PROGRESS MATCH
# =========================================================

@dataclass(frozen=True)
class ScoreState:
    """
    Score of one in-progress match.

    Replaced, never mutated: rule engines and recognizers return a new
    ScoreState. The score payload type is keyed by ``sport`` and checked
    on construction.
    """
    sport: Sport
    team_a_score: Score
    team_b_score: Score
    team_a_name: str
    team_b_name: str
    team_a_serving: bool = True
    game_history: Tuple[GamePoint, ...] = ()
    current_game: int = 1
    is_match_point: bool = False
    completed_games: Tuple[Tuple[GamePoint, ...], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "sport", Sport.parse(self.sport))
        object.__setattr__(self, "game_history", tuple(self.game_history))
        object.__setattr__(
            self, "completed_games", tuple(tuple(g) for g in self.completed_games)
        )

        for label in ("team_a_name", "team_b_name"):
            if not isinstance(getattr(self, label), str):
                raise InvalidScoreStateError(f"{label} must be a str")

        _check_score(self.sport, self.team_a_score, "team_a_score")
        _check_score(self.sport, self.team_b_score, "team_b_score")

        if (
            self.team_a_score is TennisPoint.ADVANTAGE
            and self.team_b_score is TennisPoint.ADVANTAGE
        ):
            raise InvalidScoreStateError("Both sides cannot hold Advantage")

        if not isinstance(self.team_a_serving, bool):
            raise InvalidScoreStateError("team_a_serving must be a bool")

        if isinstance(self.current_game, bool) or not isinstance(self.current_game, int):
            raise InvalidScoreStateError("current_game must be an int")
        if self.current_game < 1:
            raise InvalidScoreStateError("current_game must be positive")

    @classmethod
    def new(cls, sport: Union[Sport, str], team_a_name: str, team_b_name: str) -> "ScoreState":
        sport = Sport.parse(sport)
        return cls(
            sport=sport,
            team_a_score=zero_score(sport),
            team_b_score=zero_score(sport),
            team_a_name=team_a_name,
            team_b_name=team_b_name,
        )

    @property
    def serving_side(self) -> str:
        return "A" if self.team_a_serving else "B"

    def score_of(self, side: str) -> Score:
        if validate_side(side) == "A":
            return self.team_a_score
        return self.team_b_score

    def name_of(self, side: str) -> str:
        if validate_side(side) == "A":
            return self.team_a_name
        return self.team_b_name

    def with_score(self, side: str, value: Score) -> "ScoreState":
        if validate_side(side) == "A":
            return replace(self, team_a_score=value)
        return replace(self, team_b_score=value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sport": self.sport.value,
            "team_a_score": score_to_json(self.team_a_score),
            "team_b_score": score_to_json(self.team_b_score),
            "team_a_name": self.team_a_name,
            "team_b_name": self.team_b_name,
            "team_a_serving": self.team_a_serving,
            "game_history": [p.to_dict() for p in self.game_history],
            "current_game": self.current_game,
            "is_match_point": self.is_match_point,
            "completed_games": [
                [p.to_dict() for p in game] for game in self.completed_games
            ],
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ScoreState":
        sport = Sport.parse(d["sport"])
        return ScoreState(
            sport=sport,
            team_a_score=score_from_json(sport, d["team_a_score"]),
            team_b_score=score_from_json(sport, d["team_b_score"]),
            team_a_name=d["team_a_name"],
            team_b_name=d["team_b_name"],
            team_a_serving=bool_from_json(d.get("team_a_serving", True), "team_a_serving"),
            game_history=_points_from_list(d.get("game_history"), sport),
            current_game=int(d.get("current_game", 1)),
            is_match_point=bool_from_json(d.get("is_match_point", False), "is_match_point"),
            completed_games=tuple(
                _points_from_list(g, sport) for g in (d.get("completed_games") or [])
            ),
        )


# =========================================================
# COMPLETED MATCH
# =========================================================

@dataclass(frozen=True)
class Match:
    id: str
    sport: Sport
    date: str
    team_a_name: str
    team_b_name: str
    team_a_final_score: Score
    team_b_final_score: Score
    games: Tuple[Tuple[GamePoint, ...], ...]
    winner: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sport": self.sport.value,
            "date": self.date,
            "team_a_name": self.team_a_name,
            "team_b_name": self.team_b_name,
            "team_a_final_score": score_to_json(self.team_a_final_score),
            "team_b_final_score": score_to_json(self.team_b_final_score),
            "games": [[p.to_dict() for p in game] for game in self.games],
            "winner": self.winner,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Match":
        sport = Sport.parse(d["sport"])
        winner = d.get("winner")
        if winner is not None:
            validate_side(winner)
        return Match(
            id=str(d["id"]),
            sport=sport,
            date=str(d.get("date", "")),
            team_a_name=str(d["team_a_name"]),
            team_b_name=str(d["team_b_name"]),
            team_a_final_score=score_from_json(sport, d["team_a_final_score"]),
            team_b_final_score=score_from_json(sport, d["team_b_final_score"]),
            games=tuple(_points_from_list(g, sport) for g in (d.get("games") or [])),
            winner=winner,
        )
