"""
Questions - the question model and the question list.

Two shapes of question share one capability set (id, question, type):
- Static questions come from the initial question source (integer ids, may
  carry choices).
- Dynamic questions are generated by the recommendation service after the
  initial submission (string ids, no choices).

The list the user steps through is append-only: dynamic questions are added
to the tail and never reorder or replace what is already there.
"""

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from .errors import DuplicateQuestionError

logger = logging.getLogger(__name__)

QuestionType = Literal["multiple_choice", "text"]


# =============================================================================
# Models
# =============================================================================


class StaticQuestion(BaseModel):
    """A question known before any network interaction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["static"] = "static"
    id: int
    question: str
    type: QuestionType
    options: tuple[str, ...] = ()

    @model_validator(mode="after")
    def options_match_type(self) -> "StaticQuestion":
        if self.type == "multiple_choice" and not self.options:
            raise ValueError(f"Question {self.id}: multiple_choice requires options")
        if self.type == "text" and self.options:
            raise ValueError(f"Question {self.id}: text questions take no options")
        return self


class DynamicQuestion(BaseModel):
    """A follow-up question produced by the initial submission."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    kind: Literal["dynamic"] = "dynamic"
    id: str
    question: str
    type: QuestionType


Question = Annotated[Union[StaticQuestion, DynamicQuestion], Field(discriminator="kind")]

_question_list = TypeAdapter(list[Question])


def answer_key(question: "Question | int | str") -> str:
    """String form of a question identifier, used for every Answer Store key."""
    if isinstance(question, (StaticQuestion, DynamicQuestion)):
        question = question.id
    return str(question)


def is_dynamic(question: Question) -> bool:
    return question.kind == "dynamic"


def choices_for(question: Question) -> tuple[str, ...]:
    """Selectable options; only static multiple-choice questions have any."""
    if question.kind == "static" and question.type == "multiple_choice":
        return question.options
    return ()


# =============================================================================
# Parsing (wire payloads carry no kind tag)
# =============================================================================


def _tag(raw: list[dict[str, Any]], kind: str) -> list[dict[str, Any]]:
    return [{**item, "kind": kind} for item in raw]


def parse_static_questions(raw: list[dict[str, Any]]) -> list[Question]:
    """Parse the initial question source into static questions."""
    return _question_list.validate_python(_tag(raw, "static"))


def parse_dynamic_questions(raw: list[dict[str, Any]]) -> list[Question]:
    """Parse server-generated follow-up questions into dynamic questions."""
    return _question_list.validate_python(_tag(raw, "dynamic"))


# =============================================================================
# Question List
# =============================================================================


def append_questions(existing: list[Question], new_ones: list[Question]) -> list[Question]:
    """
    Return a new list with new_ones appended after existing.

    existing is never mutated. Identifiers are compared by their string form,
    so a static 1 and a dynamic "1" collide.
    """
    seen = {answer_key(q) for q in existing}
    for question in new_ones:
        key = answer_key(question)
        if key in seen:
            raise DuplicateQuestionError(f"Duplicate question identifier: {key}")
        seen.add(key)

    merged = [*existing, *new_ones]
    logger.debug(f"Question list grew {len(existing)} -> {len(merged)}")
    return merged
