"""
Phase Controller - drives a questionnaire session through its phases.

INITIAL -> submit static answers, append the returned follow-up questions
AI      -> submit all answers, receive recommendations
RECOMMENDATIONS -> render only

Remote calls are awaited to completion before any state is touched, so a
failed submission leaves questions, answers, phase and position exactly as
they were; only the displayed error changes. One transition at a time: the
submitting flag rejects a second advance_phase while one is in flight.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from .client import EnrollmentBackend
from .errors import (
    EnrollmentError,
    ErrorKind,
    SessionClosedError,
    SessionError,
    TransitionInProgressError,
)
from .phases import Phase, get_next_phase, is_terminal
from .questions import Question, append_questions
from .recommendations import Recommendation
from .state import SessionState

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load enrollment questions"
SUBMIT_ERROR_MESSAGE = "Failed to submit questions. Please try again."


class StepResult(Enum):
    """Outcome of a navigation request."""
    MOVED = "moved"                  # stepped within the current list
    PHASE_ADVANCED = "phase_advanced"  # follow-up questions appended
    COMPLETED = "completed"          # recommendations received
    BLOCKED = "blocked"              # navigation not allowed right now
    FAILED = "failed"                # submission failed, error is displayed


@dataclass
class PhaseTransition:
    """A committed phase change."""
    from_phase: Phase
    to_phase: Phase
    added_questions: list[Question] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)


class PhaseController:
    """Owns a SessionState and the backend it talks to."""

    def __init__(self, backend: EnrollmentBackend, state: SessionState | None = None):
        self.backend = backend
        self.state = state or SessionState()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def load_questions(self) -> bool:
        """Fetch the static questions. Returns False and shows an error on failure."""
        state = self.state
        if state.phase != Phase.INITIAL:
            raise SessionClosedError("Questions can only be loaded before the first submission")

        state.loading = True
        state.error = None
        try:
            questions = await self.backend.load_initial_questions()
        except EnrollmentError as e:
            logger.error(f"Error loading questions: {e}")
            state.error = SessionError(ErrorKind.LOAD, LOAD_ERROR_MESSAGE, str(e))
            return False
        finally:
            state.loading = False

        state.questions = list(questions)
        state.current_index = 0
        logger.info(f"Loaded {len(questions)} initial questions")
        return True

    async def retry(self) -> bool:
        """
        Leave the error view.

        A load failure re-runs the load. A submission failure just clears the
        error; answers, phase and position are untouched and the user
        re-triggers next().
        """
        error = self.state.error
        if error is None:
            return True
        if error.kind == ErrorKind.LOAD:
            return await self.load_questions()
        self.state.error = None
        return True

    # -------------------------------------------------------------------------
    # Answers
    # -------------------------------------------------------------------------

    def answer(self, answer: str) -> None:
        """Answer the question at the current step."""
        question = self.state.current_question
        if question is None:
            raise ValueError("No current question to answer")
        self.answer_question(question, answer)

    def answer_question(self, question: "Question | int | str", answer: str) -> None:
        if is_terminal(self.state.phase):
            raise ValueError("Questionnaire is complete; answers are closed")
        self.state.answers.record(question, answer)

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    async def next(self) -> StepResult:
        """Step forward, or submit the current phase from its last question."""
        state = self.state
        if not state.can_go_next:
            return StepResult.BLOCKED

        if state.step_forward():
            return StepResult.MOVED

        try:
            transition = await self.advance_phase()
        except EnrollmentError:
            return StepResult.FAILED

        if transition.to_phase == Phase.RECOMMENDATIONS:
            return StepResult.COMPLETED
        return StepResult.PHASE_ADVANCED

    def back(self) -> StepResult:
        if not self.state.can_go_back:
            return StepResult.BLOCKED
        self.state.step_back()
        return StepResult.MOVED

    # -------------------------------------------------------------------------
    # Phase transitions
    # -------------------------------------------------------------------------

    async def advance_phase(self) -> PhaseTransition:
        """
        Submit the current phase and commit its result.

        Raises TransitionInProgressError if a submission is already in flight,
        SessionClosedError once recommendations are in, and the underlying
        EnrollmentError (after recording it as the displayed error) when the
        submission fails.
        """
        state = self.state
        if is_terminal(state.phase):
            raise SessionClosedError("Recommendations already received")
        if state.submitting:
            raise TransitionInProgressError("A submission is already in progress")

        from_phase = state.phase
        responses = state.answers.to_responses(state.questions)
        state.submitting = True
        try:
            if from_phase == Phase.INITIAL:
                transition = await self._submit_initial(responses)
            else:
                transition = await self._submit_ai(responses)
        except EnrollmentError as e:
            logger.error(f"Error submitting {from_phase.value} questions: {e}")
            state.error = SessionError(ErrorKind.SUBMISSION, SUBMIT_ERROR_MESSAGE, str(e))
            raise
        finally:
            state.submitting = False

        logger.info(f"Phase {transition.from_phase.value} -> {transition.to_phase.value}")
        return transition

    async def _submit_initial(self, responses: list[dict[str, str]]) -> PhaseTransition:
        state = self.state
        ai_questions = await self.backend.submit_initial(responses)
        merged = append_questions(state.questions, ai_questions)

        first_new = len(state.questions)
        state.questions = merged
        state.phase = get_next_phase(Phase.INITIAL)
        state.current_index = first_new
        return PhaseTransition(Phase.INITIAL, state.phase, added_questions=list(ai_questions))

    async def _submit_ai(self, responses: list[dict[str, str]]) -> PhaseTransition:
        state = self.state
        recommendations = await self.backend.submit_ai(responses)

        state.recommendations = list(recommendations)
        state.phase = get_next_phase(Phase.AI)
        return PhaseTransition(Phase.AI, state.phase, recommendations=list(recommendations))
