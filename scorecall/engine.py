import logging
from dataclasses import replace
from typing import Callable, Dict, Optional

from scorecall import ledger
from scorecall.config import PICKLEBALL_POINTS_TO, PICKLEBALL_WIN_BY, TENNIS_SEQUENCE
from scorecall.exceptions import UnsupportedSportError
from scorecall.models import (
    ScoreState,
    Sport,
    TennisPoint,
    other_side,
    score_to_json,
    validate_side,
    zero_score,
)

logger = logging.getLogger(__name__)

_TENNIS_SEQUENCE = tuple(TennisPoint(token) for token in TENNIS_SEQUENCE)


# =========================================================
# PUBLIC API
# =========================================================

def update_score(state: ScoreState, side: str) -> ScoreState:
    """
    Credit one rally to ``side`` using the rule engine for ``state.sport``.
    """
    validate_side(side)

    try:
        rule_engine = RULE_ENGINES[state.sport]
    except KeyError:
        raise UnsupportedSportError(f"Unsupported sport: {state.sport!r}") from None

    return rule_engine(state, side)


def update_tennis_score(state: ScoreState, side: str) -> ScoreState:
    _require_sport(state, Sport.TENNIS)
    validate_side(side)

    own = state.score_of(side)
    opponent = state.score_of(other_side(side))

    if own is TennisPoint.ADVANTAGE:
        return handle_game_win(state, side)

    if opponent is TennisPoint.ADVANTAGE:
        # Back to deuce
        new_state = replace(
            state,
            team_a_score=TennisPoint.FORTY,
            team_b_score=TennisPoint.FORTY,
        )
    elif own is TennisPoint.FORTY and opponent is TennisPoint.FORTY:
        new_state = state.with_score(side, TennisPoint.ADVANTAGE)
    else:
        next_point = _TENNIS_SEQUENCE[_TENNIS_SEQUENCE.index(own) + 1]
        if next_point is TennisPoint.GAME:
            return handle_game_win(state, side)
        new_state = state.with_score(side, next_point)

    return ledger.append_point(new_state)


def update_pickleball_score(state: ScoreState, side: str) -> ScoreState:
    """
    Rally with side-out scoring: only the serving side can score. A point
    claimed by the receiving side becomes a side-out.
    """
    _require_sport(state, Sport.PICKLEBALL)
    validate_side(side)

    if side == state.serving_side:
        new_state = state.with_score(side, state.score_of(side) + 1)
    else:
        logger.debug("Side out: %s loses the serve", state.name_of(state.serving_side))
        new_state = replace(state, team_a_serving=not state.team_a_serving)

    winner = pickleball_game_winner(new_state)
    if winner:
        return handle_game_win(new_state, winner)

    return ledger.append_point(new_state)


def handle_game_win(state: ScoreState, winner: str) -> ScoreState:
    validate_side(winner)

    logger.info(
        "Game %d won by %s (%s - %s)",
        state.current_game,
        state.name_of(winner),
        score_to_json(state.team_a_score),
        score_to_json(state.team_b_score),
    )

    closed = ledger.close_game(state)
    zero = zero_score(state.sport)

    if state.sport is Sport.PICKLEBALL:
        team_a_serving = not state.team_a_serving
    else:
        team_a_serving = state.team_a_serving

    return replace(
        closed,
        team_a_score=zero,
        team_b_score=zero,
        team_a_serving=team_a_serving,
        current_game=state.current_game + 1,
        is_match_point=False,
    )


# =========================================================
# GAME LOGIC
# =========================================================

def is_pickleball_game_won(a: int, b: int) -> bool:
    return (a >= PICKLEBALL_POINTS_TO or b >= PICKLEBALL_POINTS_TO) and abs(a - b) >= PICKLEBALL_WIN_BY


def pickleball_game_winner(state: ScoreState) -> Optional[str]:
    a = state.team_a_score
    b = state.team_b_score

    if not is_pickleball_game_won(a, b):
        return None

    return "A" if a > b else "B"


def _require_sport(state: ScoreState, sport: Sport):
    if state.sport is not sport:
        raise UnsupportedSportError(
            f"{sport.value} rules cannot score a {state.sport.value} match"
        )


RULE_ENGINES: Dict[Sport, Callable[[ScoreState, str], ScoreState]] = {
    Sport.TENNIS: update_tennis_score,
    Sport.PICKLEBALL: update_pickleball_score,
}
