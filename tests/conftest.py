import asyncio
from typing import List, Optional, Union

import pytest

from cadet_quiz.controller import GameController
from cadet_quiz.models import Question
from cadet_quiz.services.sound_board import SOUND_CHANNELS, SoundBoard
from cadet_quiz.view import SnapshotView


def make_question(n: int = 1, correct_index: int = 0) -> Question:
    return Question(
        prompt=f"A nave percorre {n * 10} km por hora. Quanto percorre em 3 horas?",
        options=[str(n * 30), str(n * 30 + 1), str(n * 30 + 2), str(n * 30 + 3)],
        correct_index=correct_index,
    )


class FakeProvider:
    """Hands out queued results in order; a cleared gate holds every fetch."""

    def __init__(self, results: Optional[List[Union[Question, Exception]]] = None) -> None:
        self.results = list(results or [])
        self.calls: List[str] = []
        self.gate = asyncio.Event()
        self.gate.set()

    async def fetch(self, difficulty: str) -> Question:
        self.calls.append(difficulty)
        await self.gate.wait()
        result = self.results.pop(0) if self.results else make_question(len(self.calls))
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def view():
    return SnapshotView(channels=SOUND_CHANNELS.values())


@pytest.fixture
def controller(provider, view):
    game = GameController(provider, view, total_rounds=5, feedback_delay=0)
    game.events.subscribe(SoundBoard(view.play_cue))
    return game
