import time
from dataclasses import replace
from typing import Optional

from scorecall.models import GamePoint, ScoreState


def now_ms() -> int:
    return int(time.time() * 1000)


def snapshot(state: ScoreState, timestamp: Optional[int] = None) -> GamePoint:
    """Capture the scores and serve of ``state`` as a GamePoint."""
    return GamePoint(
        timestamp=now_ms() if timestamp is None else timestamp,
        team_a_score=state.team_a_score,
        team_b_score=state.team_b_score,
        team_a_serving=state.team_a_serving,
        game=state.current_game,
    )


def append_point(state: ScoreState, timestamp: Optional[int] = None) -> ScoreState:
    return replace(
        state,
        game_history=state.game_history + (snapshot(state, timestamp),),
    )


def close_game(state: ScoreState, timestamp: Optional[int] = None) -> ScoreState:
    """
    Record the deciding point and move the game's history into
    ``completed_games``. Scores are left untouched; resetting them is
    the caller's job.
    """
    final_history = state.game_history + (snapshot(state, timestamp),)
    return replace(
        state,
        game_history=(),
        completed_games=state.completed_games + (final_history,),
    )
