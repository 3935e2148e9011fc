"""
Transcript recognizer.

Turns a spoken score callout into a new ScoreState. Each sport has an
ordered tuple of RecognitionRule; the first rule whose ``match`` returns a
non-None payload wins, and its ``action`` builds the new state. A None
result means nothing was recognized and the caller keeps listening.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from scorecall.engine import update_tennis_score
from scorecall.exceptions import UnsupportedSportError
from scorecall.models import ScoreState, Sport, TennisPoint

logger = logging.getLogger(__name__)

# server score, receiver score, server number
SCORE_CALL_PATTERN = re.compile(r"(\d+)\D+(\d+)\D+(\d+)")
SIDE_OUT_PATTERN = re.compile(r"side\s*out")


@dataclass(frozen=True)
class RecognitionRule:
    name: str
    match: Callable[[str, ScoreState], Optional[Any]]
    action: Callable[[ScoreState, Any], ScoreState]


def normalize_transcript(transcript: str) -> str:
    return (transcript or "").lower()


def named_side(text: str, state: ScoreState) -> Optional[str]:
    """
    Side whose team name appears in ``text``. Team A is checked first.
    Blank names never match.
    """
    for side in ("A", "B"):
        name = state.name_of(side).strip().lower()
        if name and name in text:
            return side
    return None


def recognize_with(
    rules: Sequence[RecognitionRule],
    transcript: str,
    state: ScoreState,
) -> Optional[ScoreState]:
    text = normalize_transcript(transcript)
    if not text.strip():
        return None

    for rule in rules:
        payload = rule.match(text, state)
        if payload is None:
            continue

        logger.info("Recognized %s call in %r", rule.name, transcript)
        return rule.action(state, payload)

    logger.debug("No score call recognized in %r", transcript)
    return None


# =========================================================
# TENNIS
# =========================================================

def _match_deuce(text: str, state: ScoreState) -> Optional[bool]:
    return True if "deuce" in text else None


def _apply_deuce(state: ScoreState, _payload: Any) -> ScoreState:
    return replace(
        state,
        team_a_score=TennisPoint.FORTY,
        team_b_score=TennisPoint.FORTY,
    )


def _match_advantage(text: str, state: ScoreState) -> Optional[str]:
    if "advantage" not in text:
        return None
    return named_side(text, state)


def _apply_advantage(state: ScoreState, side: str) -> ScoreState:
    if side == "A":
        return replace(state, team_a_score=TennisPoint.ADVANTAGE, team_b_score=TennisPoint.FORTY)
    return replace(state, team_a_score=TennisPoint.FORTY, team_b_score=TennisPoint.ADVANTAGE)


def _match_game(text: str, state: ScoreState) -> Optional[str]:
    if "game" not in text or "set" in text or "match" in text:
        return None
    return named_side(text, state)


TENNIS_RULES: Tuple[RecognitionRule, ...] = (
    RecognitionRule("deuce", _match_deuce, _apply_deuce),
    RecognitionRule("advantage", _match_advantage, _apply_advantage),
    RecognitionRule("game", _match_game, update_tennis_score),
)


def recognize_tennis_score(transcript: str, state: ScoreState) -> Optional[ScoreState]:
    return recognize_with(TENNIS_RULES, transcript, state)


# =========================================================
# PICKLEBALL
# =========================================================

def _match_score_call(text: str, state: ScoreState) -> Optional[Tuple[int, int, int]]:
    found = SCORE_CALL_PATTERN.search(text)
    if not found:
        return None

    try:
        return int(found.group(1)), int(found.group(2)), int(found.group(3))
    except ValueError:
        # Digit runs past the interpreter's int conversion limit
        logger.debug("Unparseable numbers in %r", text[:80])
        return None


def _apply_score_call(state: ScoreState, call: Tuple[int, int, int]) -> ScoreState:
    server_score, receiver_score, server_number = call
    logger.debug("Server number %d called", server_number)

    if state.team_a_serving:
        return replace(state, team_a_score=server_score, team_b_score=receiver_score)
    return replace(state, team_a_score=receiver_score, team_b_score=server_score)


def _match_side_out(text: str, state: ScoreState) -> Optional[bool]:
    return True if SIDE_OUT_PATTERN.search(text) else None


def _apply_side_out(state: ScoreState, _payload: Any) -> ScoreState:
    return replace(state, team_a_serving=not state.team_a_serving)


PICKLEBALL_RULES: Tuple[RecognitionRule, ...] = (
    RecognitionRule("score", _match_score_call, _apply_score_call),
    RecognitionRule("side out", _match_side_out, _apply_side_out),
)


def recognize_pickleball_score(transcript: str, state: ScoreState) -> Optional[ScoreState]:
    return recognize_with(PICKLEBALL_RULES, transcript, state)


# =========================================================
# DISPATCH
# =========================================================

RULES_BY_SPORT: Dict[Sport, Tuple[RecognitionRule, ...]] = {
    Sport.TENNIS: TENNIS_RULES,
    Sport.PICKLEBALL: PICKLEBALL_RULES,
}


def recognize_score(transcript: str, state: ScoreState) -> Optional[ScoreState]:
    try:
        rules = RULES_BY_SPORT[state.sport]
    except KeyError:
        raise UnsupportedSportError(f"Unsupported sport: {state.sport!r}") from None

    return recognize_with(rules, transcript, state)
