from typing import Iterable, Optional, Protocol, Sequence
from .errors import AudioPlaybackError
from .models import GameSnapshot, OptionMark, OptionView, Screen

LOADING_TEXT = "Gerando transmissão..."

def format_score(score: int) -> str:
    return f"PONTUAÇÃO: {score}"

def format_final_score(score: int, total: int) -> str:
    return f"Sua pontuação final é {score} de {total}"

class GameView(Protocol):
    """Sink-only surface the controller drives. Nothing flows back through it."""

    def navigate(self, screen: Screen) -> None: ...

    def show_loading(self) -> None: ...

    def render_question(self, prompt: str, options: Sequence[str]) -> None: ...

    def disable_options(self) -> None: ...

    def mark_option(self, index: int, mark: OptionMark) -> None: ...

    def update_score(self, score: int) -> None: ...

    def show_error(self, message: str) -> None: ...

    def show_final_score(self, score: int, total: int) -> None: ...

class SnapshotView:
    """Records what the page should show so the browser can poll it as JSON.

    Sound channels are counters: every play bumps the channel's count and the
    page restarts that channel from the beginning when it sees a new value.
    """

    def __init__(self, channels: Iterable[str] = ()) -> None:
        self.channels = set(channels)
        self.data = GameSnapshot()

    def navigate(self, screen: Screen) -> None:
        self.data.screen = screen
        if screen == "game":
            # A new play-through starts without the previous result
            self.data.final_score_text = None

    def show_loading(self) -> None:
        self.data.question_text = LOADING_TEXT
        self.data.options = []
        self.data.error = None

    def render_question(self, prompt: str, options: Sequence[str]) -> None:
        self.data.question_text = prompt
        self.data.options = [OptionView(index=i, text=text) for i, text in enumerate(options)]
        self.data.error = None

    def disable_options(self) -> None:
        for option in self.data.options:
            option.disabled = True

    def mark_option(self, index: int, mark: OptionMark) -> None:
        self.data.options[index].mark = mark

    def update_score(self, score: int) -> None:
        self.data.score_text = format_score(score)

    def show_error(self, message: str) -> None:
        self.data.question_text = message
        self.data.options = []
        self.data.error = message

    def show_final_score(self, score: int, total: int) -> None:
        self.data.final_score_text = format_final_score(score, total)

    def play_cue(self, channel: str) -> None:
        if channel not in self.channels:
            raise AudioPlaybackError(f"unknown sound channel: {channel}")
        self.data.cues[channel] = self.data.cues.get(channel, 0) + 1

    def snapshot(self, *, state: str, difficulty: Optional[str], score: int, rounds_completed: int, total_rounds: int) -> GameSnapshot:
        return self.data.model_copy(
            update={
                "state": state,
                "difficulty": difficulty,
                "score": score,
                "rounds_completed": rounds_completed,
                "total_rounds": total_rounds,
            },
            deep=True,
        )
