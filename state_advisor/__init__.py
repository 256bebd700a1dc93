"""Questionnaire-driven recommender for React state management libraries."""

from .engine import recommend
from .flow import QuestionFlow

__all__ = ["recommend", "QuestionFlow"]

__version__ = "1.0.0"
