from scorecall.exceptions import UnsupportedSportError
from scorecall.models import ScoreState, Sport, TennisPoint, score_to_json


def format_score(state: ScoreState) -> str:
    """Text shown on the scoreboard and read out after every update."""
    if state.sport is Sport.TENNIS:
        return format_tennis_score(state)
    if state.sport is Sport.PICKLEBALL:
        return format_pickleball_score(state)
    raise UnsupportedSportError(f"Unsupported sport: {state.sport!r}")


def format_tennis_score(state: ScoreState) -> str:
    a = state.team_a_score
    b = state.team_b_score

    if a is TennisPoint.FORTY and b is TennisPoint.FORTY:
        return "Deuce"

    if a is TennisPoint.ADVANTAGE:
        return f"Advantage {state.team_a_name}"

    if b is TennisPoint.ADVANTAGE:
        return f"Advantage {state.team_b_name}"

    return f"{score_to_json(a)} - {score_to_json(b)}"


def format_pickleball_score(state: ScoreState) -> str:
    # Server's score first, then receiver's, then the server number
    if state.team_a_serving:
        server, receiver = state.team_a_score, state.team_b_score
    else:
        server, receiver = state.team_b_score, state.team_a_score

    return f"{server} - {receiver} - {server_number(state)}"


def server_number(state: ScoreState) -> int:
    """
    1 on an even score total, 2 on odd. Only pickleball has server
    numbers; other sports report 0.
    """
    if state.sport is not Sport.PICKLEBALL:
        return 0

    total = state.team_a_score + state.team_b_score
    return 1 if total % 2 == 0 else 2


def announce_match_start(state: ScoreState) -> str:
    return (
        f"New {state.sport.value} match started. "
        f"{state.team_a_name} versus {state.team_b_name}"
    )
