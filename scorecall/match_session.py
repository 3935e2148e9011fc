import logging
import uuid
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from scorecall.exceptions import InvalidScoreStateError
from scorecall.models import Match, ScoreState, Sport, score_from_json
from scorecall.recognizer import recognize_score
from scorecall.settings import AppSettings

logger = logging.getLogger(__name__)

_STATE_FIELDS = frozenset(f.name for f in fields(ScoreState))
_SCORE_FIELDS = ("team_a_score", "team_b_score")


class MatchSession:
    """
    Lifecycle of the active match.

    Responsibilities:
    - Own the active ScoreState (at most one)
    - Archive a Match record on end, including auto-archival on start
    - Feed transcripts through the recognizer
    - Keep the completed match history, newest first
    - Hold the AppSettings that gate recognition
    """

    def __init__(
        self,
        current: Optional[ScoreState] = None,
        history: Optional[List[Match]] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._current = current
        self._history: List[Match] = list(history or [])
        self._settings = settings or AppSettings()

    # ---------------------------------------------------------
    # Core API
    # ---------------------------------------------------------

    @property
    def current(self) -> Optional[ScoreState]:
        return self._current

    @property
    def is_active(self) -> bool:
        return self._current is not None

    def start(
        self,
        sport: Union[Sport, str],
        team_a_name: str,
        team_b_name: str,
    ) -> ScoreState:
        if self._current is not None:
            self.end()

        self._current = ScoreState.new(sport, team_a_name, team_b_name)
        logger.info(
            "Started %s match: %s vs %s",
            self._current.sport.value,
            team_a_name,
            team_b_name,
        )
        return self._current

    def update(
        self,
        changes: Union[ScoreState, Mapping[str, Any], None] = None,
        **kwargs: Any,
    ) -> Optional[ScoreState]:
        """
        Shallow-merge ``changes`` into the active state. A full ScoreState
        replaces it. Without an active match this does nothing.
        """
        if self._current is None:
            logger.debug("update() ignored: no active match")
            return None

        if isinstance(changes, ScoreState):
            if changes.sport is not self._current.sport:
                raise InvalidScoreStateError("Cannot change the sport of an active match")
            self._current = changes
            return self._current

        merged = dict(changes or {})
        merged.update(kwargs)

        unknown = set(merged) - _STATE_FIELDS
        if unknown:
            raise InvalidScoreStateError(f"Unknown field(s): {sorted(unknown)}")

        if "sport" in merged and Sport.parse(merged["sport"]) is not self._current.sport:
            raise InvalidScoreStateError("Cannot change the sport of an active match")

        # Accept the stored text form of a score ("40", "7")
        for name in _SCORE_FIELDS:
            if isinstance(merged.get(name), str):
                merged[name] = score_from_json(self._current.sport, merged[name])

        self._current = replace(self._current, **merged)
        return self._current

    def end(self) -> Optional[Match]:
        if self._current is None:
            logger.debug("end() ignored: no active match")
            return None

        final = self._current

        if final.game_history:
            games = final.completed_games + (final.game_history,)
        else:
            games = final.completed_games

        match = Match(
            id=str(uuid.uuid4()),
            sport=final.sport,
            date=datetime.now(timezone.utc).isoformat(),
            team_a_name=final.team_a_name,
            team_b_name=final.team_b_name,
            team_a_final_score=final.team_a_score,
            team_b_final_score=final.team_b_score,
            games=games,
            winner=self.determine_winner(final),
        )

        self._history.insert(0, match)
        self._current = None

        logger.info("Ended %s match %s, winner: %s", match.sport.value, match.id, match.winner)
        return match

    def process_transcript(self, transcript: str) -> Optional[ScoreState]:
        """
        Run ``transcript`` through the recognizer. On a recognized call the
        new state becomes the active one and is returned.
        """
        if self._current is None:
            logger.debug("Transcript ignored: no active match")
            return None

        if self._settings.auto_end_matches:
            logger.debug("Transcript ignored: auto_end_matches is set")
            return None

        recognized = recognize_score(transcript, self._current)
        if recognized is None:
            return None

        return self.update(recognized)

    # ---------------------------------------------------------
    # Winner
    # ---------------------------------------------------------

    @staticmethod
    def determine_winner(state: ScoreState) -> Optional[str]:
        # Tennis has no set tracking, so no winner can be decided.
        if state.sport is Sport.TENNIS:
            return None

        if state.team_a_score > state.team_b_score:
            return "A"
        if state.team_b_score > state.team_a_score:
            return "B"
        return None

    # ---------------------------------------------------------
    # History
    # ---------------------------------------------------------

    @property
    def history(self) -> List[Match]:
        return list(self._history)

    def clear_history(self):
        self._history = []

    # ---------------------------------------------------------
    # Settings
    # ---------------------------------------------------------

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def update_settings(self, **changes: Any) -> AppSettings:
        self._settings = self._settings.update(**changes)
        return self._settings

    def reset_settings(self) -> AppSettings:
        self._settings = self._settings.reset()
        return self._settings
