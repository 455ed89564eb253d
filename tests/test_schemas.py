from __future__ import annotations

import copy

import pytest
from pydantic import ValidationError

from app.schemas import FeedbackMessage, QuestionSet, score_answers
from tests.fakes import make_question_payload


def test_valid_question_set():
    qs = QuestionSet.model_validate(make_question_payload())
    assert len(qs.questions) == 5
    assert all(len(q.choices) == 4 for q in qs.questions)
    assert [q.correct_choice_id for q in qs.questions] == ["b", "a", "c", "b", "c"]


@pytest.mark.parametrize("count", [0, 4, 6])
def test_wrong_question_count_rejected(count):
    payload = make_question_payload(correct_ids=("a",) * count)
    with pytest.raises(ValidationError):
        QuestionSet.model_validate(payload)


def test_wrong_choice_count_rejected():
    payload = make_question_payload()
    payload["questions"][2]["choices"].pop()
    with pytest.raises(ValidationError):
        QuestionSet.model_validate(payload)


def test_multiple_correct_choices_rejected():
    payload = make_question_payload()
    payload["questions"][0]["choices"][0]["isCorrect"] = True
    with pytest.raises(ValidationError, match="exactly one correct"):
        QuestionSet.model_validate(payload)


def test_no_correct_choice_rejected():
    payload = make_question_payload()
    for choice in payload["questions"][4]["choices"]:
        choice["isCorrect"] = False
    with pytest.raises(ValidationError, match="exactly one correct"):
        QuestionSet.model_validate(payload)


def test_string_boolean_rejected():
    payload = make_question_payload()
    payload["questions"][1]["choices"][0]["isCorrect"] = "true"
    with pytest.raises(ValidationError):
        QuestionSet.model_validate(payload)


def test_missing_and_empty_fields_rejected():
    missing = make_question_payload()
    del missing["questions"][0]["choices"][1]["text"]
    with pytest.raises(ValidationError):
        QuestionSet.model_validate(missing)

    empty = make_question_payload()
    empty["questions"][3]["id"] = ""
    with pytest.raises(ValidationError):
        QuestionSet.model_validate(empty)


def test_duplicate_ids_rejected():
    dup_questions = make_question_payload()
    dup_questions["questions"][1]["id"] = "q1"
    with pytest.raises(ValidationError, match="unique"):
        QuestionSet.model_validate(dup_questions)

    dup_choices = make_question_payload()
    dup_choices["questions"][0]["choices"][3]["id"] = "a"
    with pytest.raises(ValidationError, match="unique"):
        QuestionSet.model_validate(dup_choices)


def test_feedback_length_bounds():
    assert FeedbackMessage(message="x" * 300).message == "x" * 300
    with pytest.raises(ValidationError):
        FeedbackMessage(message="x" * 301)
    with pytest.raises(ValidationError):
        FeedbackMessage(message="")
    with pytest.raises(ValidationError):
        FeedbackMessage.model_validate({"msg": "wrong key"})


def test_score_contribution_per_question():
    qs = QuestionSet.model_validate(make_question_payload())
    assert qs.get_question("q1").correct_choice_id == "b"

    assert score_answers(qs, {"q1": "b"}) == 1
    assert score_answers(qs, {"q1": "a"}) == 0
    assert score_answers(qs, {}) == 0
    assert score_answers(qs, {"q1": "b", "q2": "a", "q3": "c", "q4": "b", "q5": "c"}) == 5
    assert score_answers(qs, {"unknown": "b"}) == 0


def test_question_set_is_immutable():
    qs = QuestionSet.model_validate(copy.deepcopy(make_question_payload()))
    with pytest.raises(ValidationError):
        qs.questions = []
