"""
Client-side quiz session state.

One explicit struct with defined transitions (topic -> quiz -> results)
instead of loose state cells.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from app.core.exceptions import QuizStateError
from app.schemas.quiz import AnswerMap, Question, QuestionSet, score_answers

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    TOPIC = "topic"
    QUIZ = "quiz"
    RESULTS = "results"


@dataclass
class QuizSession:
    """State of one quiz attempt."""
    topic: str = ""
    screen: Screen = Screen.TOPIC
    question_set: Optional[QuestionSet] = None
    current_index: int = 0
    answers: AnswerMap = field(default_factory=dict)
    loading: bool = False
    error: str = ""
    feedback: str = ""

    @property
    def total(self) -> int:
        return len(self.question_set.questions) if self.question_set else 0

    @property
    def current_question(self) -> Question:
        self._require(Screen.QUIZ)
        return self.question_set.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.total - 1

    @property
    def score(self) -> int:
        if self.question_set is None:
            return 0
        return score_answers(self.question_set, self.answers)

    def start(self, topic: str, question_set: QuestionSet) -> None:
        """Enter the quiz screen with a fresh answer sheet."""
        self.topic = topic
        self.question_set = question_set
        self.current_index = 0
        self.answers = {}
        self.feedback = ""
        self.error = ""
        self.loading = False
        self.screen = Screen.QUIZ
        logger.debug(f"Session started for '{topic}' with {self.total} questions")

    def select(self, choice_id: str) -> None:
        question = self.current_question
        if not question.has_choice(choice_id):
            raise QuizStateError(f"Choice '{choice_id}' does not belong to question '{question.id}'")
        self.answers = {**self.answers, question.id: choice_id}

    def next(self) -> None:
        self._require(Screen.QUIZ)
        if self.current_index < self.total - 1:
            self.current_index += 1

    def previous(self) -> None:
        self._require(Screen.QUIZ)
        if self.current_index > 0:
            self.current_index -= 1

    def finish(self) -> int:
        """Move to the results screen and return the score."""
        self._require(Screen.QUIZ)
        self.screen = Screen.RESULTS
        return self.score

    def fail(self, error: str) -> None:
        self.loading = False
        self.error = error

    def reset(self) -> None:
        self.__init__()

    def _require(self, screen: Screen) -> None:
        if self.screen != screen:
            raise QuizStateError(f"Expected screen '{screen.value}', session is on '{self.screen.value}'")
