from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, model_validator
from typing import Dict, List, Literal, Optional

OPTION_COUNT = 4
DIFFICULTIES = ("Fácil", "Médio", "Difícil")
DEFAULT_DIFFICULTY = "Médio"

Difficulty = Literal["Fácil", "Médio", "Difícil"]
OptionMark = Literal["correct", "incorrect"]
Screen = Literal["start", "game", "end"]

class Question(BaseModel):
    """One generated problem. `correct_index` is the position of the right answer in `options`."""

    model_config = ConfigDict(frozen=True)

    prompt: StrictStr = Field(min_length=1)
    options: List[StrictStr]
    correct_index: StrictInt

    @model_validator(mode="after")
    def _check_contract(self) -> "Question":
        if len(self.options) != OPTION_COUNT:
            raise ValueError(f"expected {OPTION_COUNT} options, got {len(self.options)}")
        if len({o.strip() for o in self.options}) != OPTION_COUNT:
            raise ValueError("options must be distinct")
        if not 0 <= self.correct_index < OPTION_COUNT:
            raise ValueError(f"correct index {self.correct_index} is outside 0..{OPTION_COUNT - 1}")
        return self

class QuestionPayload(BaseModel):
    # Field names as requested from the service
    question: StrictStr
    options: List[StrictStr]
    correctAnswerIndex: StrictInt

    def to_question(self) -> Question:
        return Question(prompt=self.question, options=self.options, correct_index=self.correctAnswerIndex)

class OptionView(BaseModel):
    index: int
    text: str
    mark: Optional[OptionMark] = None
    disabled: bool = False

class GameSnapshot(BaseModel):
    screen: Screen = "start"
    state: str = "start"
    difficulty: Optional[str] = None
    score: int = 0
    rounds_completed: int = 0
    total_rounds: int = 0
    score_text: str = ""
    question_text: str = ""
    options: List[OptionView] = Field(default_factory=list)
    error: Optional[str] = None
    final_score_text: Optional[str] = None
    cues: Dict[str, int] = Field(default_factory=dict)

class CreateGameResponse(BaseModel):
    game_id: str
    snapshot: GameSnapshot

class SelectDifficultyRequest(BaseModel):
    difficulty: Difficulty = DEFAULT_DIFFICULTY

class SubmitAnswerRequest(BaseModel):
    option_index: int = Field(ge=0, le=OPTION_COUNT - 1)

class SubmitAnswerResponse(BaseModel):
    accepted: bool
    snapshot: GameSnapshot

class DebugPromptResponse(BaseModel):
    prompt: str
    system_instruction: str
