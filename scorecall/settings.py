from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict

from scorecall.exceptions import InvalidSettingsError


@dataclass(frozen=True)
class AppSettings:
    """
    User preferences shared with the UI shell.

    Only ``auto_end_matches`` changes scoring behavior: while it is set,
    transcripts are not recognized. The rest is carried for the speech
    and announcement collaborators.
    """
    announcement_volume: float = 0.8
    announcement_voice: str = "en-US"
    recognition_sensitivity: float = 0.7
    accent_type: str = "American"
    enable_haptics: bool = True
    enable_background_noise_cancellation: bool = True
    auto_end_matches: bool = False

    def __post_init__(self):
        for name in ("announcement_volume", "recognition_sensitivity"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidSettingsError(f"{name} must be a number, got {value!r}")
            if not 0 <= value <= 1:
                raise InvalidSettingsError(f"{name} must be in [0,1]")

        for name in ("announcement_voice", "accent_type"):
            if not isinstance(getattr(self, name), str):
                raise InvalidSettingsError(f"{name} must be a str")

        for name in ("enable_haptics", "enable_background_noise_cancellation", "auto_end_matches"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidSettingsError(f"{name} must be a bool")

    def update(self, **changes: Any) -> "AppSettings":
        """Shallow-merge ``changes`` into a new AppSettings."""
        unknown = set(changes) - _SETTINGS_FIELDS
        if unknown:
            raise InvalidSettingsError(f"Unknown setting(s): {sorted(unknown)}")
        return replace(self, **changes)

    def reset(self) -> "AppSettings":
        return AppSettings()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "AppSettings":
        # Missing keys fall back to the defaults
        return AppSettings().update(**d)


_SETTINGS_FIELDS = frozenset(f.name for f in fields(AppSettings))
