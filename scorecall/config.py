import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("SCORECALL_DATA_DIR", PROJECT_ROOT / "matches"))
CURRENT_MATCH_FILE = DATA_DIR / "current_match.json"
MATCH_HISTORY_FILE = DATA_DIR / "match_history.json"
SETTINGS_FILE = DATA_DIR / "settings.json"

SCHEMA_VERSION = 1
LOG_LEVEL = os.getenv("SCORECALL_LOG_LEVEL", "INFO").upper()

TENNIS_SEQUENCE = ("0", "15", "30", "40", "Game")
PICKLEBALL_POINTS_TO = 11
PICKLEBALL_WIN_BY = 2
