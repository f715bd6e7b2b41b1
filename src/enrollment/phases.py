"""
Questionnaire phases.

The flow only moves forward:
1. INITIAL - static questions, submitted to get follow-up questions
2. AI - generated follow-up questions, submitted to get recommendations
3. RECOMMENDATIONS - render only, no further stepping
"""

from enum import Enum


class Phase(Enum):
    """Questionnaire phases, in order."""
    INITIAL = "initial"
    AI = "ai"
    RECOMMENDATIONS = "recommendations"


_NEXT_PHASE = {
    Phase.INITIAL: Phase.AI,
    Phase.AI: Phase.RECOMMENDATIONS,
}


def get_next_phase(phase: Phase) -> Phase:
    """Phase reached after a successful submission; terminal phase maps to itself."""
    return _NEXT_PHASE.get(phase, phase)


def is_terminal(phase: Phase) -> bool:
    return phase == Phase.RECOMMENDATIONS
