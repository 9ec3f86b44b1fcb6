class CadetQuizError(Exception):
    """Base class for the errors raised by the quiz."""


class ConfigurationError(CadetQuizError):
    """Missing or invalid settings. Fatal at startup."""


class ProviderError(CadetQuizError):
    """The question service failed or broke the question contract."""

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.cause = cause


class AudioPlaybackError(CadetQuizError):
    """A sound cue could not be played. Logged, never surfaced."""
