from scorecall.formatter import format_score
from scorecall.match_session import MatchSession
from scorecall.models import score_to_json

session = MatchSession()

# Pickleball: A serves first
session.start("pickleball", "Hawks", "Owls")

for call in ["1-0-1", "2-0-1", "side out", "noise on the court", "0-2-2", "side out", "10-9-1"]:
    state = session.process_transcript(call)
    print(f"{call!r:24} -> {format_score(state) if state else 'no match'}")

# Tennis: starting a new match archives the pickleball one
state = session.start("tennis", "Nadal", "Federer")

for call in ["game Nadal", "game Nadal", "game Federer", "deuce", "advantage Federer", "game Federer"]:
    state = session.process_transcript(call)
    print(f"{call!r:24} -> {format_score(state) if state else 'no match'}")

session.end()

print("\nHistory:")
for match in session.history:
    print(match.sport.value, score_to_json(match.team_a_final_score), score_to_json(match.team_b_final_score), match.winner)
