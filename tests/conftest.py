"""
Pytest configuration and fixtures for enrollment tests.
"""

import asyncio
import os
from unittest.mock import AsyncMock

import pytest

# Set test environment before importing enrollment modules
os.environ["ENROLLMENT_ENV"] = "development"
os.environ["ENROLLMENT_API_BASE_URL"] = "http://enrollment.test"

from enrollment.controller import PhaseController
from enrollment.questions import parse_dynamic_questions, parse_static_questions
from enrollment.recommendations import Recommendation


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


@pytest.fixture
def static_question_data():
    """Initial question payload as served by GET /api/enrollment."""
    return [
        {
            "id": 1,
            "question": "What is your major?",
            "type": "multiple_choice",
            "options": ["Computer Science", "Economics", "Biology"],
        },
        {
            "id": 2,
            "question": "What do you want to get out of next quarter?",
            "type": "text",
        },
    ]


@pytest.fixture
def static_questions(static_question_data):
    return parse_static_questions(static_question_data)


@pytest.fixture
def ai_questions():
    return parse_dynamic_questions([
        {"id": "ai_1", "question": "Do you prefer project-based courses?", "type": "text"},
    ])


@pytest.fixture
def sample_recommendation_data():
    """One full course card."""
    return {
        "code": "CSE 110",
        "title": "Software Engineering",
        "description": "Team-based software development.",
        "units": 4,
        "department": "Computer Science",
        "professor": "Gillespie",
        "rmp_rating": 4.2,
        "matching_reviews": ["Great projects", "Very practical"],
        "grade_distribution": {"A": 45, "B": 40, "C": 15},
        "requirements_fulfilled": ["Major Core", "Upper Division"],
    }


@pytest.fixture
def sample_recommendation(sample_recommendation_data):
    return Recommendation.model_validate(sample_recommendation_data)


@pytest.fixture
def mock_backend(static_questions, ai_questions, sample_recommendation):
    """Backend that succeeds with the two-phase scenario."""
    backend = AsyncMock()
    backend.load_initial_questions.return_value = static_questions
    backend.submit_initial.return_value = ai_questions
    backend.submit_ai.return_value = [sample_recommendation]
    return backend


@pytest.fixture
def controller(mock_backend):
    return PhaseController(mock_backend)


@pytest.fixture
def loaded_controller(controller):
    """Controller with the static questions loaded."""
    assert _run(controller.load_questions())
    return controller
