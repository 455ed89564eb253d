from __future__ import annotations

import asyncio
import json

import pytest

from app.core.constants import FEEDBACK_MAX_CHARS
from app.core.llm import LLMProvider
from app.schemas import QuestionSet, score_answers
from app.services.quiz_service import fallback_feedback, fallback_question_set
from tests.fakes import ScriptedAdapter, make_question_payload, make_service

TOPICS = ["AI", "Photosynthesis", "Tech Trends", "x" * 60]


def assert_structure(question_set: QuestionSet):
    assert len(question_set.questions) == 5
    for question in question_set.questions:
        assert len(question.choices) == 4
        assert sum(choice.isCorrect for choice in question.choices) == 1


@pytest.mark.parametrize("topic", TOPICS)
def test_fallback_question_set_satisfies_contract(topic):
    question_set = fallback_question_set(topic)

    assert_structure(question_set)
    assert QuestionSet.model_validate(question_set.model_dump()) == question_set
    assert [q.correct_choice_id for q in question_set.questions] == ["b", "a", "c", "b", "c"]
    for question in question_set.questions:
        assert topic in question.question
        assert all(topic in choice.text for choice in question.choices)


@pytest.mark.parametrize("topic", TOPICS)
@pytest.mark.parametrize("adapters", [
    lambda: [],
    lambda: [ScriptedAdapter([None]), ScriptedAdapter(["not json"], provider=LLMProvider.OPENAI)],
    lambda: [ScriptedAdapter(['{"questions": []}']), ScriptedAdapter([RuntimeError("boom")], provider=LLMProvider.OPENAI)],
    lambda: [ScriptedAdapter(["{}"], configured=False), ScriptedAdapter(['{"questions": "nope"}'], provider=LLMProvider.OPENAI)],
])
def test_question_generation_is_total(topic, adapters):
    built = adapters()
    service = make_service(*built)

    question_set = asyncio.run(service.generate_question_set(topic))

    assert_structure(question_set)
    assert question_set == fallback_question_set(topic)
    for adapter in built:
        assert len(adapter.calls) <= 3


def test_fallbacks_are_deterministic(offline_service):
    first = asyncio.run(offline_service.generate_question_set("Graph Theory"))
    second = asyncio.run(offline_service.generate_question_set("Graph Theory"))
    assert first.model_dump_json() == second.model_dump_json()

    feedback_a = asyncio.run(offline_service.generate_feedback("Graph Theory", 3))
    feedback_b = asyncio.run(offline_service.generate_feedback("Graph Theory", 3))
    assert feedback_a.model_dump_json() == feedback_b.model_dump_json()


@pytest.mark.parametrize("score, expected", [
    (5, "Excellent work on X! You clearly mastered the material."),
    (4, "Excellent work on X! You clearly mastered the material."),
    (3, "Nice job on X. Review a few tricky areas and try again."),
    (2, "You're getting there with X. Revisit the basics and build up."),
    (1, "Good start on X. Focus on fundamentals and take another run!"),
    (0, "Good start on X. Focus on fundamentals and take another run!"),
])
def test_feedback_tiers(offline_service, score, expected):
    feedback = asyncio.run(offline_service.generate_feedback("X", score))
    assert feedback.message == expected
    assert feedback == fallback_feedback("X", score)


def test_fallback_feedback_fits_limit_for_longest_topic():
    for score in range(6):
        assert len(fallback_feedback("y" * 60, score).message) <= FEEDBACK_MAX_CHARS


def test_model_output_is_preferred():
    adapter = ScriptedAdapter([json.dumps(make_question_payload(prefix="Model"))])
    service = make_service(adapter)

    question_set = asyncio.run(service.generate_question_set("Volcanoes"))

    assert question_set.questions[0].question == "Model question 1?"
    system_turn, user_turn = adapter.calls[0]
    assert system_turn.content == "You are an assistant that generates JSON strictly matching a schema."
    assert "Generate 5 multiple-choice questions about Volcanoes." in user_turn.content


def test_feedback_prompt_mentions_topic_and_score():
    adapter = ScriptedAdapter(['{"message": "Solid effort on Volcanoes!"}'])
    service = make_service(adapter)

    feedback = asyncio.run(service.generate_feedback("Volcanoes", 2))

    assert feedback.message == "Solid effort on Volcanoes!"
    user_turn = adapter.calls[0][1]
    assert "Topic: Volcanoes. Score: 2/5." in user_turn.content
    assert '{"message":"string"}' in user_turn.content


def test_photosynthesis_end_to_end(offline_service):
    question_set = asyncio.run(offline_service.generate_question_set("Photosynthesis"))

    first = question_set.questions[0]
    assert "Photosynthesis" in first.question
    assert first.correct_choice_id == "b"

    answers = {q.id: q.correct_choice_id for q in question_set.questions}
    score = score_answers(question_set, answers)
    assert score == 5

    feedback = asyncio.run(offline_service.generate_feedback("Photosynthesis", score))
    assert feedback.message == "Excellent work on Photosynthesis! You clearly mastered the material."
