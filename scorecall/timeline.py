from typing import Iterable

from scorecall.engine import update_score
from scorecall.formatter import format_score
from scorecall.models import ScoreState, Sport
from scorecall.recognizer import recognize_score


def _entry(state: ScoreState) -> dict:
    return {
        "game": state.current_game,
        "team_a_score": state.team_a_score,
        "team_b_score": state.team_b_score,
        "team_a_serving": state.team_a_serving,
        "display": format_score(state),
    }


def build_score_timeline(
    sport: Sport,
    sides: Iterable[str],
    team_a_name: str = "Team A",
    team_b_name: str = "Team B",
) -> list[dict]:
    """
    Replays a match from scratch, crediting each rally to the given side.
    Returns a flattened timeline after each rally.
    Does NOT mutate external state.
    """
    state = ScoreState.new(sport, team_a_name, team_b_name)
    timeline: list[dict] = []

    for index, side in enumerate(sides):
        state = update_score(state, side)
        timeline.append({"rally_index": index + 1, **_entry(state)})

    return timeline


def build_transcript_timeline(
    transcripts: Iterable[str],
    state: ScoreState,
) -> list[dict]:
    """
    Replays transcripts against ``state``. Only recognized callouts
    produce an entry.
    """
    timeline: list[dict] = []
    current = state

    for index, transcript in enumerate(transcripts):
        recognized = recognize_score(transcript, current)
        if recognized is None:
            continue

        current = recognized
        timeline.append({
            "transcript_index": index + 1,
            "transcript": transcript,
            **_entry(current),
        })

    return timeline
