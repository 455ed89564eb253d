"""
Terminal quiz client.
Plays one quiz against a running server: topic -> questions -> results.

Usage:
    python scripts/play_quiz.py --topic "Photosynthesis"
"""

import argparse
import sys
import os

import requests

sys.path.append(os.getcwd())

from app.core.constants import CLIENT_FEEDBACK_DEFAULT
from app.core.exceptions import QuizStateError
from app.schemas import QuestionSet
from app.services.session import QuizSession

DEFAULT_URL = "http://localhost:4000/api/quiz"


def fetch_questions(base_url: str, topic: str) -> QuestionSet:
    response = requests.post(f"{base_url}/generate", json={"topic": topic}, timeout=120)
    response.raise_for_status()
    return QuestionSet.model_validate(response.json())


def fetch_feedback(base_url: str, topic: str, score: int) -> str:
    response = requests.post(f"{base_url}/feedback", json={"topic": topic, "score": score}, timeout=120)
    response.raise_for_status()
    return response.json()["message"]


def ask_choice(session: QuizSession) -> None:
    question = session.current_question
    print(f"\nQuestion {session.current_index + 1} of {session.total}")
    print(question.question)
    for choice in question.choices:
        print(f"  {choice.id}) {choice.text}")

    while True:
        picked = input("Your answer: ").strip()
        try:
            session.select(picked)
            return
        except QuizStateError:
            print(f"Pick one of: {', '.join(c.id for c in question.choices)}")


def play(base_url: str, topic: str) -> int:
    session = QuizSession()

    print(f"🔹 Generating questions about {topic}...")
    session.loading = True
    try:
        question_set = fetch_questions(base_url, topic)
    except requests.exceptions.RequestException as e:
        session.fail("Failed to fetch questions. Please try again.")
        print(f"❌ {session.error} ({e})")
        return 1
    session.start(topic, question_set)

    while True:
        ask_choice(session)
        if session.is_last_question:
            break
        session.next()

    score = session.finish()
    print(f"\nYour score: {score} / {session.total}")

    try:
        session.feedback = fetch_feedback(base_url, topic, score)
    except requests.exceptions.RequestException:
        session.feedback = CLIENT_FEEDBACK_DEFAULT
    print(f"AI Feedback: {session.feedback}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Play a quiz in the terminal")
    parser.add_argument("--url", default=DEFAULT_URL, help="Quiz API base URL")
    parser.add_argument("--topic", help="Quiz topic (prompted if omitted)")
    args = parser.parse_args()

    topic = args.topic or input("Topic: ").strip()
    if not topic:
        print("⚠️  A topic is required")
        return 1
    return play(args.url.rstrip("/"), topic)


if __name__ == "__main__":
    sys.exit(main())
