import logging
from typing import Callable, Dict
from ..errors import AudioPlaybackError
from ..events import GameEvent

logger = logging.getLogger("cadet_quiz")

# One channel per cue; replaying a channel restarts it
SOUND_CHANNELS: Dict[GameEvent, str] = {
    GameEvent.START: "start",
    GameEvent.CORRECT: "correct",
    GameEvent.INCORRECT: "incorrect",
    GameEvent.END: "end",
}

class SoundBoard:
    """Event listener that turns game events into fire-and-forget sound cues."""

    def __init__(self, player: Callable[[str], None], channels: Dict[GameEvent, str] | None = None) -> None:
        self.player = player
        self.channels = dict(SOUND_CHANNELS if channels is None else channels)

    def __call__(self, event: GameEvent) -> None:
        channel = self.channels.get(event)
        if channel is None:
            return
        try:
            self.player(channel)
        except Exception as exc:
            error = exc if isinstance(exc, AudioPlaybackError) else AudioPlaybackError(f"{type(exc).__name__}: {exc}")
            logger.warning({"event": "audio_playback_failed", "channel": channel, "error": str(error)})
