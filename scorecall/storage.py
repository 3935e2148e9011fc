import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from scorecall.config import (
    CURRENT_MATCH_FILE,
    MATCH_HISTORY_FILE,
    SCHEMA_VERSION,
    SETTINGS_FILE,
)
from scorecall.exceptions import ScoreCallError, StorageError
from scorecall.match_session import MatchSession
from scorecall.models import Match, ScoreState
from scorecall.settings import AppSettings

logger = logging.getLogger(__name__)


def _read_document(path: Path) -> Optional[Dict[str, Any]]:
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise StorageError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise StorageError(f"{path} must contain a JSON object")

    if data.get("schema_version") != SCHEMA_VERSION:
        raise StorageError(
            f"Unsupported schema_version in {path}: {data.get('schema_version')!r}"
        )

    return data


def _write_document(path: Path, data: Dict[str, Any]):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"schema_version": SCHEMA_VERSION, **data}, f, ensure_ascii=False, indent=4)


# =========================================================
# ACTIVE MATCH
# =========================================================

def save_current_match(path: Path, state: Optional[ScoreState]):
    _write_document(path, {
        "current_match": state.to_dict() if state is not None else None
    })


def load_current_match(path: Path) -> Optional[ScoreState]:
    data = _read_document(path)
    if data is None or data.get("current_match") is None:
        return None

    try:
        return ScoreState.from_dict(data["current_match"])
    except (KeyError, TypeError, ValueError, ScoreCallError) as e:
        raise StorageError(f"Invalid current match in {path}: {e}") from e


# =========================================================
# HISTORY
# =========================================================

def save_match_history(path: Path, matches: List[Match]):
    _write_document(path, {"matches": [m.to_dict() for m in matches]})


def load_match_history(path: Path) -> List[Match]:
    data = _read_document(path)
    if data is None:
        return []

    raw = data.get("matches", [])
    if not isinstance(raw, list):
        raise StorageError(f"matches in {path} must be a list")

    try:
        return [Match.from_dict(m) for m in raw]
    except (KeyError, TypeError, ValueError, ScoreCallError) as e:
        raise StorageError(f"Invalid match record in {path}: {e}") from e


# =========================================================
# SETTINGS
# =========================================================

def save_settings(path: Path, settings: AppSettings):
    _write_document(path, {"settings": settings.to_dict()})


def load_settings(path: Path) -> AppSettings:
    data = _read_document(path)
    if data is None or data.get("settings") is None:
        return AppSettings()

    try:
        return AppSettings.from_dict(data["settings"])
    except (TypeError, ValueError, ScoreCallError) as e:
        raise StorageError(f"Invalid settings in {path}: {e}") from e


# =========================================================
# SESSION
# =========================================================

def load_session(
    current_path: Path = CURRENT_MATCH_FILE,
    history_path: Path = MATCH_HISTORY_FILE,
    settings_path: Path = SETTINGS_FILE,
) -> MatchSession:
    session = MatchSession(
        current=load_current_match(current_path),
        history=load_match_history(history_path),
        settings=load_settings(settings_path),
    )
    logger.debug(
        "Loaded session: active=%s, %d archived match(es)",
        session.is_active,
        len(session.history),
    )
    return session


def save_session(
    session: MatchSession,
    current_path: Path = CURRENT_MATCH_FILE,
    history_path: Path = MATCH_HISTORY_FILE,
    settings_path: Path = SETTINGS_FILE,
):
    save_current_match(current_path, session.current)
    save_match_history(history_path, session.history)
    save_settings(settings_path, session.settings)
