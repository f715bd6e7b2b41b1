"""
Answer Store - session-scoped mapping from question identifier to answer.

Keys are always the string form of the identifier (see questions.answer_key),
so static integer ids and dynamic string ids share one namespace.
"""

from collections.abc import Iterable

from .questions import DynamicQuestion, Question, StaticQuestion, answer_key


class AnswerStore:
    """Answers keyed by question id; re-answering overwrites."""

    def __init__(self, answers: dict[str, str] | None = None):
        self._answers: dict[str, str] = dict(answers or {})

    def record(self, question: "Question | int | str", answer: str) -> None:
        self._answers[answer_key(question)] = answer

    def get(self, question: "Question | int | str", default: str | None = None) -> str | None:
        return self._answers.get(answer_key(question), default)

    def has_answer(self, question: "Question | int | str") -> bool:
        """True when a non-empty answer exists (an empty string counts as none)."""
        return bool(self._answers.get(answer_key(question)))

    def snapshot(self) -> dict[str, str]:
        return dict(self._answers)

    def to_responses(self, questions: Iterable[Question]) -> list[dict[str, str]]:
        """
        Build the submission body entries for the given questions.

        Follows list order and skips unanswered questions; answers for ids
        outside the list are not sent.
        """
        responses = []
        for question in questions:
            key = answer_key(question)
            if key in self._answers:
                responses.append({"question_id": key, "answer": self._answers[key]})
        return responses

    def __contains__(self, question: object) -> bool:
        if not isinstance(question, (int, str, StaticQuestion, DynamicQuestion)):
            return False
        return answer_key(question) in self._answers

    def __len__(self) -> int:
        return len(self._answers)

    def __repr__(self) -> str:
        return f"AnswerStore({self._answers!r})"
