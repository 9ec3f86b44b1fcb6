import logging
import time
import uuid
from typing import Callable, Dict, Optional
from .config import GAME_IDLE_TTL_SECONDS, settings
from .controller import GameController, QuestionProvider
from .models import GameSnapshot
from .services.sound_board import SOUND_CHANNELS, SoundBoard
from .view import SnapshotView

logger = logging.getLogger("cadet_quiz")

class GameEntry:
	def __init__(self, controller: GameController, view: SnapshotView, last_seen: float) -> None:
		self.controller = controller
		self.view = view
		self.last_seen = last_seen

	def snapshot(self) -> GameSnapshot:
		session = self.controller.session
		return self.view.snapshot(
			state=self.controller.state.value,
			difficulty=session.difficulty if session else None,
			score=session.score if session else 0,
			rounds_completed=session.rounds_completed if session else 0,
			total_rounds=self.controller.total_rounds,
		)

class GameStore:
	"""Live games by id. Games nobody has touched for `idle_ttl` seconds are dropped on the next create."""

	def __init__(self, idle_ttl: float = GAME_IDLE_TTL_SECONDS, clock: Callable[[], float] = time.monotonic) -> None:
		self.games: Dict[str, GameEntry] = {}
		self.idle_ttl = idle_ttl
		self.clock = clock

	def create_game(self, provider: QuestionProvider, *, total_rounds: int, feedback_delay: float) -> str:
		self.prune()
		game_id = str(uuid.uuid4())
		view = SnapshotView(channels=SOUND_CHANNELS.values())
		controller = GameController(provider, view, total_rounds=total_rounds, feedback_delay=feedback_delay)
		controller.events.subscribe(SoundBoard(view.play_cue))
		self.games[game_id] = GameEntry(controller, view, self.clock())
		return game_id

	def has_game(self, game_id: str) -> bool:
		return game_id in self.games

	def get(self, game_id: str) -> Optional[GameEntry]:
		entry = self.games.get(game_id)
		if entry is not None:
			entry.last_seen = self.clock()
		return entry

	def prune(self) -> int:
		cutoff = self.clock() - self.idle_ttl
		expired = [game_id for game_id, entry in self.games.items() if entry.last_seen < cutoff]
		for game_id in expired:
			self.games.pop(game_id).controller.close()
		if expired:
			logger.debug({"event": "games_expired", "count": len(expired), "remaining": len(self.games)})
		return len(expired)

	async def discard(self, game_id: str) -> None:
		entry = self.games.pop(game_id, None)
		if entry is not None:
			await entry.controller.abandon()

	def __len__(self) -> int:
		return len(self.games)

game_store = GameStore(idle_ttl=settings.game_idle_ttl_seconds)
