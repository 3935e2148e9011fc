import json

import pytest

from scorecall.exceptions import StorageError
from scorecall.match_session import MatchSession
from scorecall.models import TennisPoint
from scorecall.settings import AppSettings
from scorecall.storage import (
    load_current_match,
    load_match_history,
    load_session,
    load_settings,
    save_current_match,
    save_match_history,
    save_session,
    save_settings,
)


# ---------------------------------------------------------
# Missing files
# ---------------------------------------------------------

def test_missing_files_load_empty(tmp_path):
    assert load_current_match(tmp_path / "current.json") is None
    assert load_match_history(tmp_path / "history.json") == []


# ---------------------------------------------------------
# Document shape
# ---------------------------------------------------------

def test_current_match_document_is_versioned(tmp_path):
    path = tmp_path / "nested" / "current.json"
    session = MatchSession()
    session.start("tennis", "Nadal", "Federer")
    session.process_transcript("advantage nadal")

    save_current_match(path, session.current)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["schema_version"] == 1
    assert data["current_match"]["sport"] == "tennis"
    assert data["current_match"]["team_a_score"] == "Advantage"
    assert data["current_match"]["team_b_score"] == "40"


def test_no_active_match_saved_as_null(tmp_path):
    path = tmp_path / "current.json"

    save_current_match(path, None)

    assert load_current_match(path) is None


def test_tennis_state_reloads_with_tokens(tmp_path):
    path = tmp_path / "current.json"
    session = MatchSession()
    state = session.start("tennis", "Nadal", "Federer")
    for call in ["game nadal", "game nadal", "game federer"]:
        state = session.process_transcript(call)

    save_current_match(path, state)
    loaded = load_current_match(path)

    assert loaded.team_a_score is TennisPoint.THIRTY
    assert loaded.team_b_score is TennisPoint.FIFTEEN
    assert len(loaded.game_history) == 3


# ---------------------------------------------------------
# Validation
# ---------------------------------------------------------

def test_unsupported_schema_version(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps({"schema_version": 99, "matches": []}), encoding="utf-8")

    with pytest.raises(StorageError):
        load_match_history(path)


def test_unversioned_document_rejected(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps({"matches": []}), encoding="utf-8")

    with pytest.raises(StorageError):
        load_match_history(path)


def test_invalid_json(tmp_path):
    path = tmp_path / "current.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        load_current_match(path)


def test_mixed_score_types_rejected(tmp_path):
    path = tmp_path / "current.json"
    path.write_text(json.dumps({
        "schema_version": 1,
        "current_match": {
            "sport": "pickleball",
            "team_a_score": "Advantage",
            "team_b_score": 3,
            "team_a_name": "Hawks",
            "team_b_name": "Owls",
        },
    }), encoding="utf-8")

    with pytest.raises(StorageError):
        load_current_match(path)


# ---------------------------------------------------------
# Session
# ---------------------------------------------------------

def test_session_survives_restart(tmp_path):
    current_path = tmp_path / "current.json"
    history_path = tmp_path / "history.json"
    settings_path = tmp_path / "settings.json"

    session = MatchSession()
    session.start("pickleball", "Hawks", "Owls")
    session.process_transcript("11-9-1")
    session.start("tennis", "Nadal", "Federer")
    session.process_transcript("game federer")
    session.update_settings(announcement_volume=0.5, auto_end_matches=True)
    save_session(session, current_path, history_path, settings_path)

    restored = load_session(current_path, history_path, settings_path)

    assert restored.current == session.current
    assert restored.history == session.history
    assert restored.history[0].winner == "A"
    assert restored.settings == session.settings

    save_match_history(history_path, [])
    assert load_match_history(history_path) == []


# ---------------------------------------------------------
# Malformed records
# ---------------------------------------------------------

def write_current(path, current_match):
    path.write_text(json.dumps({
        "schema_version": 1,
        "current_match": current_match,
    }), encoding="utf-8")


@pytest.mark.parametrize("current_match", [
    [],
    "tennis",
    {
        "sport": "tennis",
        "team_a_score": "15",
        "team_b_score": "0",
        "team_a_name": "Nadal",
        "team_b_name": "Federer",
        "current_game": "two",
    },
    {
        "sport": "pickleball",
        "team_a_score": 3,
        "team_b_score": 1,
        "team_a_name": "Hawks",
        "team_b_name": "Owls",
        "team_a_serving": "false",
    },
    {
        "sport": "pickleball",
        "team_a_score": 3,
        "team_b_score": 1,
        "team_a_name": None,
        "team_b_name": "Owls",
    },
])
def test_malformed_current_match_rejected(tmp_path, current_match):
    path = tmp_path / "current.json"
    write_current(path, current_match)

    with pytest.raises(StorageError):
        load_current_match(path)


@pytest.mark.parametrize("record", [
    [],
    {"id": "x", "sport": "pickleball"},
    {
        "id": "x",
        "sport": "pickleball",
        "date": "2024-01-01T00:00:00+00:00",
        "team_a_name": "Hawks",
        "team_b_name": "Owls",
        "team_a_final_score": "eleven",
        "team_b_final_score": 9,
        "games": [],
        "winner": "A",
    },
])
def test_malformed_history_record_rejected(tmp_path, record):
    path = tmp_path / "history.json"
    path.write_text(json.dumps({"schema_version": 1, "matches": [record]}), encoding="utf-8")

    with pytest.raises(StorageError):
        load_match_history(path)


# ---------------------------------------------------------
# Settings
# ---------------------------------------------------------

def test_missing_settings_load_defaults(tmp_path):
    assert load_settings(tmp_path / "settings.json") == AppSettings()


def test_settings_round_trip(tmp_path):
    path = tmp_path / "settings.json"
    settings = AppSettings(accent_type="British", enable_haptics=False)

    save_settings(path, settings)
    data = json.loads(path.read_text(encoding="utf-8"))

    assert data["schema_version"] == 1
    assert data["settings"]["accent_type"] == "British"
    assert load_settings(path) == settings


def test_partial_settings_fill_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "schema_version": 1,
        "settings": {"auto_end_matches": True},
    }), encoding="utf-8")

    settings = load_settings(path)

    assert settings.auto_end_matches is True
    assert settings.announcement_volume == 0.8


@pytest.mark.parametrize("raw", [
    {"announcement_volume": 3},
    {"enable_haptics": "yes"},
    {"theme": "dark"},
    ["auto_end_matches"],
])
def test_invalid_settings_rejected(tmp_path, raw):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"schema_version": 1, "settings": raw}), encoding="utf-8")

    with pytest.raises(StorageError):
        load_settings(path)
