import json
import logging
from time import perf_counter
from typing import Any, Dict
import google.generativeai as genai
from pydantic import ValidationError
from ..config import Settings, settings as default_settings
from ..errors import ProviderError
from ..models import Question, QuestionPayload
from .prompt_builder import PromptBuilder

logger = logging.getLogger("cadet_quiz")

QUESTION_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "question": {
            "type": "STRING",
            "description": "O problema de matemática com um tema futurista/espacial.",
        },
        "options": {
            "type": "ARRAY",
            "description": "Um array de 4 respostas possíveis, uma das quais é a correta.",
            "items": {"type": "STRING"},
        },
        "correctAnswerIndex": {
            "type": "INTEGER",
            "description": "O índice (0-3) da resposta correta no array 'options'.",
        },
    },
    "required": ["question", "options", "correctAnswerIndex"],
}

class GeminiQuestionProvider:
    """Asks Gemini for one structured question per call.

    Stateless between calls: no cache, no retry, no dedup. Whatever goes wrong
    on the way (transport, empty body, bad JSON, broken contract) comes out as
    ProviderError.
    """

    def __init__(self, config: Settings | None = None, prompt_builder: PromptBuilder | None = None) -> None:
        config = config or default_settings
        genai.configure(api_key=config.require_api_key())
        self.model_name = config.gemini_model
        self.generation_config = genai.GenerationConfig(
            temperature=config.gemini_temperature,
            response_mime_type="application/json",
            response_schema=QUESTION_SCHEMA,
        )
        self.prompt_builder = prompt_builder or PromptBuilder()

    def _strip_code_fences(self, text: str) -> str:
        t = text.strip()
        if t.startswith("```"):
            parts = t.split("\n", 1)
            t = parts[1] if len(parts) == 2 else ""
            if t.endswith("```"):
                t = t[:-3]
        if t.startswith("json\n"):
            t = t[5:]
        return t.strip()

    def _response_text(self, response: Any) -> str:
        try:
            raw_text = response.text or ""
        except ValueError:
            # .text raises when the candidate carries no text part (blocked, empty)
            raw_text = ""
        if not raw_text and getattr(response, "candidates", None):
            parts = response.candidates[0].content.parts
            raw_text = "".join(getattr(p, "text", "") for p in parts)
        return raw_text

    def parse(self, raw_text: str) -> Question:
        cleaned = self._strip_code_fences(raw_text or "")
        if not cleaned:
            raise ProviderError("empty response from question service")
        try:
            payload_obj = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise ProviderError(f"response is not valid JSON: {e.msg}") from e
        if not isinstance(payload_obj, dict):
            raise ProviderError("response is not a JSON object")
        try:
            return QuestionPayload.model_validate(payload_obj).to_question()
        except ValidationError as e:
            reasons = "; ".join(f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}" for err in e.errors())
            raise ProviderError(f"response violates the question contract: {reasons}") from e

    async def fetch(self, difficulty: str) -> Question:
        prompt, system_instruction = self.prompt_builder.build_pair(difficulty=difficulty)
        try:
            model = genai.GenerativeModel(
                self.model_name,
                generation_config=self.generation_config,
                system_instruction=system_instruction,
            )
            t0 = perf_counter()
            response = await model.generate_content_async(prompt)
            latency_ms = int((perf_counter() - t0) * 1000)
            raw_text = self._response_text(response)
        except Exception as e:
            logger.exception("gemini_call_failed")
            raise ProviderError(f"question service call failed: {e}") from e
        logger.debug({"event": "gemini_response", "model": self.model_name, "difficulty": difficulty, "preview": raw_text[:200], "latency_ms": latency_ms})
        try:
            return self.parse(raw_text)
        except ProviderError as e:
            logger.warning({"event": "gemini_payload_rejected", "cause": e.cause})
            raise
