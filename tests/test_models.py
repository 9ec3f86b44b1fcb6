import pytest
from pydantic import ValidationError

from cadet_quiz.models import Question, QuestionPayload, SubmitAnswerRequest


def test_question_accepts_four_distinct_options():
    q = Question(prompt="2 + 2 em órbita?", options=["3", "4", "5", "6"], correct_index=1)
    assert q.options == ["3", "4", "5", "6"]
    assert q.correct_index == 1


@pytest.mark.parametrize("options", [["1", "2", "3"], ["1", "2", "3", "4", "5"], []])
def test_question_rejects_wrong_option_count(options):
    with pytest.raises(ValidationError):
        Question(prompt="p", options=options, correct_index=0)


@pytest.mark.parametrize("index", [-1, 4, 10])
def test_question_rejects_out_of_range_index(index):
    with pytest.raises(ValidationError):
        Question(prompt="p", options=["a", "b", "c", "d"], correct_index=index)


def test_question_rejects_duplicate_options():
    with pytest.raises(ValidationError):
        Question(prompt="p", options=["7", "7 ", "8", "9"], correct_index=0)


def test_payload_maps_service_field_names():
    payload = QuestionPayload(question="Quanto é 3 x 4?", options=["12", "7", "34", "1"], correctAnswerIndex=0)
    q = payload.to_question()
    assert q.prompt == "Quanto é 3 x 4?"
    assert q.correct_index == 0


def test_payload_is_strict_about_types():
    with pytest.raises(ValidationError):
        QuestionPayload.model_validate({"question": "q", "options": ["1", "2", "3", "4"], "correctAnswerIndex": "1"})


def test_answer_request_bounds():
    assert SubmitAnswerRequest(option_index=3).option_index == 3
    with pytest.raises(ValidationError):
        SubmitAnswerRequest(option_index=4)
