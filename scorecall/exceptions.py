class ScoreCallError(Exception):
    pass


class UnsupportedSportError(ScoreCallError):
    pass


class InvalidSideError(ScoreCallError):
    pass


class InvalidScoreStateError(ScoreCallError):
    pass


class StorageError(ScoreCallError):
    pass


class InvalidSettingsError(ScoreCallError):
    pass
