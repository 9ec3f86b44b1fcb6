import asyncio
import logging
from enum import Enum
from typing import Optional, Protocol
from .config import FEEDBACK_DELAY_SECONDS, TOTAL_ROUNDS
from .errors import ProviderError
from .events import EventBus, GameEvent
from .models import DIFFICULTIES, Question
from .view import GameView

logger = logging.getLogger("cadet_quiz")

ERROR_TEXT = "Erro na transmissão. Por favor, tente novamente."

class QuestionProvider(Protocol):
    async def fetch(self, difficulty: str) -> Question: ...

class GameState(str, Enum):
    START = "start"
    LOADING = "loading"
    AWAITING_ANSWER = "awaiting_answer"
    SCORING = "scoring"
    GAME_OVER = "game_over"

class Session:
    """One play-through, from difficulty selection to game over."""

    def __init__(self, difficulty: str) -> None:
        self.difficulty = difficulty
        self.score = 0
        self.rounds_completed = 0
        self.awaiting_answer = False

class GameController:
    """Drives one player's game: start, question rounds, scoring and game over.

    Every fetch and every feedback pause runs as a single asyncio task tagged
    with a token. Any transition bumps the token, so a task that finishes
    after the game has moved on sees a stale token and drops its result.
    """

    def __init__(
        self,
        provider: QuestionProvider,
        view: GameView,
        *,
        total_rounds: int = TOTAL_ROUNDS,
        feedback_delay: float = FEEDBACK_DELAY_SECONDS,
        events: EventBus | None = None,
    ) -> None:
        self.provider = provider
        self.view = view
        self.total_rounds = total_rounds
        self.feedback_delay = feedback_delay
        self.events = events or EventBus()
        self.state = GameState.START
        self.session: Optional[Session] = None
        self.question: Optional[Question] = None
        self.last_error: Optional[str] = None
        self._token = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    async def select_difficulty(self, difficulty: str) -> bool:
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"unknown difficulty: {difficulty!r}")
        if self.state is not GameState.START:
            logger.debug({"event": "difficulty_ignored", "state": self.state.value})
            return False
        self.session = Session(difficulty)
        self.view.update_score(0)
        self.view.navigate("game")
        self.events.emit(GameEvent.START)
        logger.info({"event": "game_started", "difficulty": difficulty, "total_rounds": self.total_rounds})
        self._begin_fetch()
        return True

    async def select_option(self, index: int) -> bool:
        session = self.session
        if (
            self.state is not GameState.AWAITING_ANSWER
            or session is None
            or self.question is None
            or not session.awaiting_answer
            or session.rounds_completed >= self.total_rounds
        ):
            logger.debug({"event": "answer_ignored", "state": self.state.value, "index": index})
            return False
        if not 0 <= index < len(self.question.options):
            logger.warning({"event": "answer_out_of_range", "index": index})
            return False

        session.awaiting_answer = False
        self.state = GameState.SCORING
        self.view.disable_options()

        correct_index = self.question.correct_index
        is_correct = index == correct_index
        # Counters settle before any view or listener side effect runs
        if is_correct:
            session.score += 1
        session.rounds_completed += 1
        if is_correct:
            self.view.mark_option(index, "correct")
            self.view.update_score(session.score)
        else:
            self.view.mark_option(index, "incorrect")
            self.view.mark_option(correct_index, "correct")
        logger.debug({
            "event": "answer_scored",
            "selected": index,
            "correct_index": correct_index,
            "is_correct": is_correct,
            "score": session.score,
            "rounds_completed": session.rounds_completed,
        })
        self._schedule(self._advance_after_feedback)
        self.events.emit(GameEvent.CORRECT if is_correct else GameEvent.INCORRECT)
        return True

    async def retry(self) -> bool:
        if self.state is not GameState.LOADING or self.last_error is None or self.busy:
            return False
        logger.info({"event": "fetch_retry", "previous_error": self.last_error})
        self._begin_fetch()
        return True

    async def play_again(self) -> bool:
        if self.state is not GameState.GAME_OVER:
            return False
        # Counters stay as they are until the next difficulty pick
        self.state = GameState.START
        self.view.navigate("start")
        return True

    async def abandon(self) -> None:
        self.close()
        if self.session is not None:
            self.session.awaiting_answer = False
        self.question = None
        self.last_error = None
        self.state = GameState.START
        self.view.navigate("start")
        logger.debug({"event": "game_abandoned"})

    def close(self) -> None:
        """Drop whatever fetch or feedback pause is still pending."""
        self._invalidate()

    async def settle(self) -> None:
        """Wait until no fetch or feedback pause is pending."""
        while self.busy:
            await asyncio.wait({self._task})

    def _invalidate(self) -> int:
        self._token += 1
        if self.busy and self._task is not asyncio.current_task():
            self._task.cancel()
        return self._token

    def _schedule(self, step) -> None:
        token = self._invalidate()
        self._task = asyncio.create_task(step(token))

    def _begin_fetch(self) -> None:
        self.state = GameState.LOADING
        self.session.awaiting_answer = False
        self.question = None
        self.last_error = None
        self.view.show_loading()
        self._schedule(self._fetch)

    async def _fetch(self, token: int) -> None:
        difficulty = self.session.difficulty
        try:
            question = await self.provider.fetch(difficulty)
        except Exception as exc:
            if isinstance(exc, ProviderError):
                e = exc
            else:
                logger.exception("question_provider_broke_contract")
                e = ProviderError(f"unexpected provider failure: {exc!r}")
            if token != self._token:
                logger.debug({"event": "stale_fetch_error_dropped", "token": token})
                return
            self.last_error = e.cause
            self.view.show_error(ERROR_TEXT)
            logger.warning({"event": "question_fetch_failed", "difficulty": difficulty, "cause": e.cause})
            return
        if token != self._token:
            logger.debug({"event": "stale_question_dropped", "token": token})
            return
        self.question = question
        self.state = GameState.AWAITING_ANSWER
        self.session.awaiting_answer = True
        self.view.render_question(question.prompt, question.options)

    async def _advance_after_feedback(self, token: int) -> None:
        await asyncio.sleep(self.feedback_delay)
        if token != self._token:
            return
        self.question = None
        if self.session.rounds_completed >= self.total_rounds:
            self.state = GameState.GAME_OVER
            self.view.navigate("end")
            self.view.show_final_score(self.session.score, self.total_rounds)
            self.events.emit(GameEvent.END)
            logger.info({"event": "game_over", "score": self.session.score, "total_rounds": self.total_rounds})
        else:
            self._begin_fetch()
