import pytest

from scorecall.exceptions import InvalidSettingsError
from scorecall.settings import AppSettings


# ---------- DEFAULTS ----------

def test_defaults():
    settings = AppSettings()

    assert settings.announcement_volume == 0.8
    assert settings.announcement_voice == "en-US"
    assert settings.recognition_sensitivity == 0.7
    assert settings.accent_type == "American"
    assert settings.enable_haptics is True
    assert settings.enable_background_noise_cancellation is True
    assert settings.auto_end_matches is False


# ---------- UPDATE / RESET ----------

def test_update_merges_and_keeps_original():
    settings = AppSettings()

    updated = settings.update(accent_type="Australian", recognition_sensitivity=1)

    assert updated.accent_type == "Australian"
    assert updated.recognition_sensitivity == 1
    assert updated.announcement_voice == "en-US"
    assert settings.accent_type == "American"


def test_update_rejects_unknown_setting():
    with pytest.raises(InvalidSettingsError):
        AppSettings().update(dark_mode=True)


@pytest.mark.parametrize("changes", [
    {"announcement_volume": 1.5},
    {"announcement_volume": -0.1},
    {"recognition_sensitivity": True},
    {"recognition_sensitivity": "high"},
    {"announcement_voice": None},
    {"enable_haptics": 1},
    {"auto_end_matches": "false"},
])
def test_update_rejects_bad_values(changes):
    with pytest.raises(InvalidSettingsError):
        AppSettings().update(**changes)


def test_reset_restores_defaults():
    settings = AppSettings(enable_haptics=False, auto_end_matches=True)

    assert settings.reset() == AppSettings()


# ---------- DICT FORM ----------

def test_from_dict_fills_missing_keys():
    settings = AppSettings.from_dict({"announcement_voice": "en-GB"})

    assert settings.announcement_voice == "en-GB"
    assert settings.to_dict() == {**AppSettings().to_dict(), "announcement_voice": "en-GB"}
