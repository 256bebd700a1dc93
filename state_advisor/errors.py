"""Exception types raised by the advisor."""

from __future__ import annotations

from typing import Iterable, List


class AdvisorError(Exception):
    """Base class for advisor failures."""


class ConfigurationError(AdvisorError):
    """
    The static data (catalog, question set, rule table) is inconsistent.

    This is fatal: it should surface at startup, never as a partial result.
    """

    def __init__(self, message: str, problems: Iterable[str] = ()) -> None:
        self.problems: List[str] = list(problems)
        if self.problems:
            message = f"{message}: " + "; ".join(self.problems)
        super().__init__(message)


class AnswerValidationError(AdvisorError, ValueError):
    """An answer set (or a single answer) failed strict validation."""

    def __init__(self, problems: Iterable[str]) -> None:
        self.problems: List[str] = list(problems)
        super().__init__("Invalid answers: " + "; ".join(self.problems))


class FlowError(AdvisorError):
    """An illegal questionnaire transition, e.g. answering after completion."""
