"""
Session State - one explicit struct for a questionnaire session.

Holds the question list, answers, phase, step position, the submitting flag
and the displayed error. Lives in memory only and is discarded with the
session. Navigation (step position, progress, button state) is computed here;
phase transitions are driven by the PhaseController that owns the state.
"""

from dataclasses import dataclass, field
from enum import Enum

from .answers import AnswerStore
from .errors import SessionError
from .phases import Phase, is_terminal
from .questions import Question, answer_key
from .recommendations import Recommendation


class View(Enum):
    """What the front-end should be showing."""
    LOADING = "loading"
    ERROR = "error"
    QUESTION = "question"
    RECOMMENDATIONS = "recommendations"


@dataclass
class SessionState:
    """
    Questionnaire session state.

    current_index stays within [0, len(questions) - 1] except right after an
    empty follow-up batch, where it points one past the end until the next
    submission. questions only ever grows.
    """
    questions: list[Question] = field(default_factory=list)
    answers: AnswerStore = field(default_factory=AnswerStore)
    phase: Phase = Phase.INITIAL
    current_index: int = 0

    submitting: bool = False
    loading: bool = True
    error: SessionError | None = None

    recommendations: list[Recommendation] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # View
    # -------------------------------------------------------------------------

    @property
    def view(self) -> View:
        if self.loading:
            return View.LOADING
        if self.error is not None:
            return View.ERROR
        if is_terminal(self.phase):
            return View.RECOMMENDATIONS
        return View.QUESTION

    @property
    def current_question(self) -> Question | None:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def is_last_step(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @property
    def can_go_back(self) -> bool:
        return self.view == View.QUESTION and self.current_index > 0

    @property
    def can_go_next(self) -> bool:
        """Forward is disabled without an answer or while a submission is in flight."""
        if self.view != View.QUESTION or self.submitting:
            return False
        question = self.current_question
        if question is None:
            # Past the end: an empty follow-up batch leaves nothing to answer
            return True
        return self.answers.has_answer(question)

    def step_forward(self) -> bool:
        """Move one step within the current list. Never crosses the end."""
        if self.is_last_step:
            return False
        self.current_index += 1
        return True

    def step_back(self) -> bool:
        if self.current_index <= 0:
            return False
        self.current_index -= 1
        return True

    def progress(self) -> float:
        """
        Percent of the currently known list reached, 0-100.

        Measured against the list as it stands, so appending follow-up
        questions lowers it without the user moving.
        """
        if not self.questions:
            return 0.0
        return min(self.current_index + 1, len(self.questions)) / len(self.questions) * 100

    def progress_label(self) -> str:
        total = len(self.questions)
        return f"Step {min(self.current_index + 1, total)} of {total}"

    def next_label(self) -> str:
        if self.submitting:
            return "Processing..."
        if self.is_last_step:
            return "Get Recommendations"
        return "Next"

    # -------------------------------------------------------------------------
    # Debugging
    # -------------------------------------------------------------------------

    def snapshot(self) -> dict:
        """Plain-dict view of the session for logs."""
        return {
            "phase": self.phase.value,
            "view": self.view.value,
            "current_index": self.current_index,
            "question_ids": [answer_key(q) for q in self.questions],
            "answers": self.answers.snapshot(),
            "submitting": self.submitting,
            "error": self.error.message if self.error else None,
            "recommendations": len(self.recommendations),
        }
