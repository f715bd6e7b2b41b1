"""
Course Enrollment Questionnaire.

Collects answers through a phased flow and renders course recommendations
computed by an external recommendation service.

Phases:
1. Initial - Static questions from the question source
2. AI - Follow-up questions generated from the initial answers
3. Recommendations - Final course list, render only
"""

__version__ = "1.0.0"

from .answers import AnswerStore
from .controller import PhaseController, PhaseTransition, StepResult
from .phases import Phase
from .questions import DynamicQuestion, Question, StaticQuestion
from .recommendations import Recommendation
from .state import SessionState, View

__all__ = [
    "AnswerStore",
    "DynamicQuestion",
    "Phase",
    "PhaseController",
    "PhaseTransition",
    "Question",
    "Recommendation",
    "SessionState",
    "StaticQuestion",
    "StepResult",
    "View",
]
