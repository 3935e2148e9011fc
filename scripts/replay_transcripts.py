# scripts/replay_transcripts.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from scorecall.formatter import announce_match_start, format_score
from scorecall.logging_utils import configure_logging
from scorecall.match_session import MatchSession
from scorecall.models import Sport, score_to_json
from scorecall.storage import save_match_history

logger = logging.getLogger("replay_transcripts")


def read_transcripts(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Replay recorded score callouts (one per line) through the recognizer."
    )
    p.add_argument("transcripts", help="Text file with one transcript per line")
    p.add_argument("--sport", choices=[s.value for s in Sport], required=True)
    p.add_argument("--team-a", default="Team A")
    p.add_argument("--team-b", default="Team B")
    p.add_argument("--history-out", default=None, help="Write the finished match to this history JSON")
    p.add_argument("--log-level", default=None)

    args = p.parse_args(argv)
    configure_logging(level=args.log_level)

    transcripts = read_transcripts(Path(args.transcripts))

    session = MatchSession()
    state = session.start(args.sport, args.team_a, args.team_b)
    print(announce_match_start(state))

    recognized = 0
    for transcript in tqdm(transcripts, desc="Replaying", unit="call"):
        new_state = session.process_transcript(transcript)
        if new_state is None:
            continue
        recognized += 1
        tqdm.write(f"[game {new_state.current_game}] {transcript!r} -> {format_score(new_state)}")

    logger.info("Recognized %d of %d transcripts", recognized, len(transcripts))

    match = session.end()
    print(
        f"Final: {score_to_json(match.team_a_final_score)} - "
        f"{score_to_json(match.team_b_final_score)}  winner={match.winner}"
    )

    if args.history_out:
        out_path = Path(args.history_out)
        save_match_history(out_path, session.history)
        print(f"Saved: {out_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
