from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
from pathlib import Path
from time import perf_counter
from .state import GameEntry, game_store
from .models import (
	CreateGameResponse,
	DebugPromptResponse,
	Difficulty,
	DEFAULT_DIFFICULTY,
	GameSnapshot,
	SelectDifficultyRequest,
	SubmitAnswerRequest,
	SubmitAnswerResponse,
)
from .services.gemini_client import GeminiQuestionProvider
from .services.prompt_builder import PromptBuilder
from .config import settings

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger("cadet_quiz")

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(title="Cadet Math Quiz", default_response_class=ORJSONResponse)
app.state.provider = None

app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

@app.on_event("startup")
def on_startup() -> None:
	# Missing credentials abort startup here instead of failing every round
	if app.state.provider is None:
		app.state.provider = GeminiQuestionProvider(settings)
	logger.info({
		"event": "api_startup",
		"model": settings.gemini_model,
		"total_rounds": settings.total_rounds,
		"feedback_delay_seconds": settings.feedback_delay_seconds,
	})

@app.middleware("http")
async def timing_middleware(request: Request, call_next):
	start = perf_counter()
	response = await call_next(request)
	duration_ms = int((perf_counter() - start) * 1000)
	logger.debug({
		"event": "request_timing",
		"method": request.method,
		"path": request.url.path,
		"status_code": response.status_code,
		"duration_ms": duration_ms,
	})
	return response

def _get_game(game_id: str) -> GameEntry:
	entry = game_store.get(game_id)
	if entry is None:
		raise HTTPException(status_code=404, detail="game_not_found")
	return entry

@app.get("/", include_in_schema=False)
def index():
	return FileResponse(STATIC_DIR / "index.html")

@app.post("/api/game", response_model=CreateGameResponse)
def create_game(request: Request):
	game_id = game_store.create_game(
		request.app.state.provider,
		total_rounds=settings.total_rounds,
		feedback_delay=settings.feedback_delay_seconds,
	)
	logger.debug({"event": "game_created", "game_id": game_id, "games": len(game_store)})
	return CreateGameResponse(game_id=game_id, snapshot=game_store.get(game_id).snapshot())

@app.get("/api/game/{game_id}", response_model=GameSnapshot)
def get_game(game_id: str):
	return _get_game(game_id).snapshot()

@app.delete("/api/game/{game_id}", status_code=204)
async def delete_game(game_id: str):
	_get_game(game_id)
	await game_store.discard(game_id)
	logger.debug({"event": "game_deleted", "game_id": game_id})

@app.post("/api/game/{game_id}/difficulty", response_model=GameSnapshot)
async def select_difficulty(game_id: str, payload: SelectDifficultyRequest):
	entry = _get_game(game_id)
	await entry.controller.select_difficulty(payload.difficulty)
	return entry.snapshot()

@app.post("/api/game/{game_id}/answer", response_model=SubmitAnswerResponse)
async def submit_answer(game_id: str, payload: SubmitAnswerRequest):
	entry = _get_game(game_id)
	accepted = await entry.controller.select_option(payload.option_index)
	logger.debug({"event": "submit_answer", "game_id": game_id, "option_index": payload.option_index, "accepted": accepted})
	return SubmitAnswerResponse(accepted=accepted, snapshot=entry.snapshot())

@app.post("/api/game/{game_id}/retry", response_model=GameSnapshot)
async def retry_question(game_id: str):
	entry = _get_game(game_id)
	await entry.controller.retry()
	return entry.snapshot()

@app.post("/api/game/{game_id}/play-again", response_model=GameSnapshot)
async def play_again(game_id: str):
	entry = _get_game(game_id)
	await entry.controller.play_again()
	return entry.snapshot()

@app.post("/api/game/{game_id}/quit", response_model=GameSnapshot)
async def quit_game(game_id: str):
	entry = _get_game(game_id)
	await entry.controller.abandon()
	return entry.snapshot()

@app.get("/api/debug/prompt", response_model=DebugPromptResponse)
def get_debug_prompt(difficulty: Difficulty = DEFAULT_DIFFICULTY):
	prompt, system_instruction = PromptBuilder().build_pair(difficulty=difficulty)
	return DebugPromptResponse(prompt=prompt, system_instruction=system_instruction)
