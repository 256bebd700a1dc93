from __future__ import annotations

"""
Step-by-step questionnaire controller.

Walks a caller through the question set one question at a time, allows
stepping back, and hands the full answer set to the engine exactly once,
when the last question is answered.
"""

from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from .config import FlowState, Question, Recommendation
from .engine import recommend
from .errors import AnswerValidationError, FlowError
from .questions import QUESTIONS, valid_values

OnComplete = Callable[[Dict[str, str]], List[Recommendation]]


class QuestionFlow:
    def __init__(
        self,
        questions: Sequence[Question] = QUESTIONS,
        on_complete: OnComplete = recommend,
    ) -> None:
        if not questions:
            raise ValueError("QuestionFlow needs at least one question")
        self._questions: List[Question] = list(questions)
        self._on_complete = on_complete
        self._step = 0
        self._answers: Dict[str, str] = {}
        self._complete = False
        self._recommendations: List[Recommendation] = []

    # -----------------------
    # Read-only views
    # -----------------------

    @property
    def step(self) -> int:
        return self._step

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def current_question(self) -> Optional[Question]:
        if self._complete:
            return None
        return self._questions[self._step]

    @property
    def progress(self) -> int:
        """Percent shown on the progress bar; counts the current question."""
        if self._complete:
            return 100
        return round((self._step + 1) / self.total * 100)

    @property
    def answers(self) -> Dict[str, str]:
        return dict(self._answers)

    @property
    def recommendations(self) -> List[Recommendation]:
        return list(self._recommendations)

    def is_complete(self) -> bool:
        return self._complete

    def state(self) -> FlowState:
        return FlowState(
            step=self._step,
            total=self.total,
            progress=self.progress,
            question=self.current_question,
            answers=self.answers,
            complete=self._complete,
            recommendations=self.recommendations,
        )

    # -----------------------
    # Transitions
    # -----------------------

    def advance(self, question_id: str, value: str) -> FlowState:
        """
        Record ``value`` for the current question and move forward.
        Answering the last question runs the engine.
        """
        if self._complete:
            raise FlowError("Questionnaire already complete; reset to start again")

        question = self._questions[self._step]
        if question_id != question.id:
            raise AnswerValidationError([f"expected an answer for {question.id}, got {question_id}"])
        allowed = valid_values(question.id, self._questions)
        if value not in allowed:
            raise AnswerValidationError([f"invalid value {value!r} for {question.id} (expected one of {allowed})"])

        self._answers[question.id] = value
        logger.debug("Answered {}={} (step {}/{})", question.id, value, self._step + 1, self.total)

        if self._step < self.total - 1:
            self._step += 1
        else:
            # only the answers of the configured questions reach the engine;
            # if it raises, the flow stays on the last question
            final = {q.id: self._answers[q.id] for q in self._questions}
            recs = list(self._on_complete(final))
            self._recommendations = recs
            self._complete = True
            logger.info("Questionnaire complete; {} recommendations", len(recs))
        return self.state()

    def back(self) -> FlowState:
        """Step back one question. No-op on the first question."""
        if self._complete:
            raise FlowError("Questionnaire already complete; reset to start again")
        if self._step > 0:
            self._step -= 1
        return self.state()

    def reset(self) -> FlowState:
        self._step = 0
        self._answers = {}
        self._complete = False
        self._recommendations = []
        return self.state()
