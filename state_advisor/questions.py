from __future__ import annotations

"""Ordered questionnaire definitions."""

from typing import Dict, List, Optional, Sequence

from .config import Option, Question


QUESTIONS: List[Question] = [
    Question(
        id="projectSize",
        prompt="What is the size and scope of your project?",
        options=[
            Option(value="small", label="Small (< 10 components, simple app)", emoji="🔸"),
            Option(value="medium", label="Medium (10-50 components, moderate complexity)", emoji="🔹"),
            Option(value="large", label="Large (50+ components, complex app)", emoji="🔷"),
        ],
    ),
    Question(
        id="teamExperience",
        prompt="What is your team's React experience level?",
        options=[
            Option(value="beginner", label="Beginner (< 1 year with React)", emoji="🌱"),
            Option(value="intermediate", label="Intermediate (1-3 years with React)", emoji="🌿"),
            Option(value="expert", label="Expert (3+ years with React)", emoji="🌳"),
        ],
    ),
    Question(
        id="stateComplexity",
        prompt="How complex is your state management needs?",
        options=[
            Option(value="simple", label="Simple (basic UI state, minimal sharing)", emoji="📄"),
            Option(value="moderate", label="Moderate (some shared state, basic async)", emoji="📋"),
            Option(value="complex", label="Complex (heavy sharing, complex async logic)", emoji="📊"),
        ],
    ),
    Question(
        id="primaryUse",
        prompt="What is your primary state management use case?",
        options=[
            Option(value="forms", label="Form state and validation", emoji="📝"),
            Option(value="api-data", label="API data and server state", emoji="🌐"),
            Option(value="real-time", label="Real-time updates and sync", emoji="⚡"),
            Option(value="shared-state", label="Shared UI state across components", emoji="🔄"),
        ],
    ),
    Question(
        id="performance",
        prompt="How important is performance optimization?",
        options=[
            Option(value="not-critical", label="Not critical (developer experience first)", emoji="😌"),
            Option(value="important", label="Important (balance performance and DX)", emoji="⚖️"),
            Option(value="critical", label="Critical (performance is top priority)", emoji="🚀"),
        ],
    ),
    Question(
        id="learningCurve",
        prompt="What is your preference for learning curve?",
        options=[
            Option(value="gentle", label="Gentle (quick to learn and implement)", emoji="🎯"),
            Option(value="willing", label="Willing to invest (prefer powerful features)", emoji="💪"),
        ],
    ),
]


def question_ids(questions: Sequence[Question] = QUESTIONS) -> List[str]:
    return [q.id for q in questions]


def questions_by_id(questions: Sequence[Question] = QUESTIONS) -> Dict[str, Question]:
    return {q.id: q for q in questions}


def get_question(question_id: str, questions: Sequence[Question] = QUESTIONS) -> Optional[Question]:
    for q in questions:
        if q.id == question_id:
            return q
    return None


def valid_values(question_id: str, questions: Sequence[Question] = QUESTIONS) -> List[str]:
    """Option values for a question; empty list for an unknown id."""
    q = get_question(question_id, questions)
    return q.option_values() if q is not None else []
