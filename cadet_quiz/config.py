import os
from pydantic import BaseModel
from dotenv import load_dotenv
from .errors import ConfigurationError

load_dotenv()

TOTAL_ROUNDS = 5
FEEDBACK_DELAY_SECONDS = 2.0
GAME_IDLE_TTL_SECONDS = 1800.0

class Settings(BaseModel):
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    gemini_temperature: float = float(os.getenv("GEMINI_TEMPERATURE", "0.7"))
    total_rounds: int = int(os.getenv("TOTAL_ROUNDS", str(TOTAL_ROUNDS)))
    feedback_delay_seconds: float = float(os.getenv("FEEDBACK_DELAY_SECONDS", str(FEEDBACK_DELAY_SECONDS)))
    game_idle_ttl_seconds: float = float(os.getenv("GAME_IDLE_TTL_SECONDS", str(GAME_IDLE_TTL_SECONDS)))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def require_api_key(self) -> str:
        key = (self.gemini_api_key or "").strip()
        if not key:
            raise ConfigurationError("GEMINI_API_KEY is not set; the question service cannot be reached")
        return key

settings = Settings()
