"""
Enrollment Client - the three collaborator endpoints the questionnaire calls.

GET  /api/enrollment               -> {"questions": [...]}
POST /api/enrollment               -> {"ai_questions": [...]}
POST /api/enrollment/ai-questions  -> {"recommendations": {"recommendations": [...]}}

Both POSTs take {"responses": [{"question_id": str, "answer": str}, ...]}.
Every failure (transport, non-2xx, unparseable body) surfaces as BackendError.
There is no retry here; the user re-triggers.
"""

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from .errors import BackendError
from .questions import Question, parse_dynamic_questions, parse_static_questions
from .recommendations import Recommendation

logger = logging.getLogger(__name__)

QUESTIONS_PATH = "/api/enrollment"
AI_QUESTIONS_PATH = "/api/enrollment/ai-questions"


class EnrollmentBackend(Protocol):
    """What the phase controller needs from the recommendation service."""

    async def load_initial_questions(self) -> list[Question]: ...

    async def submit_initial(self, responses: list[dict[str, str]]) -> list[Question]: ...

    async def submit_ai(self, responses: list[dict[str, str]]) -> list[Recommendation]: ...


class EnrollmentClient:
    """
    httpx-backed EnrollmentBackend.

    No local timeout by default: the service's own error response is the only
    failure signal. Pass timeout to override, transport for tests.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "EnrollmentClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    async def load_initial_questions(self) -> list[Question]:
        data = await self._request("GET", QUESTIONS_PATH)
        try:
            return parse_static_questions(data.get("questions") or [])
        except ValidationError as e:
            raise BackendError(f"Malformed question list: {e}") from e

    async def submit_initial(self, responses: list[dict[str, str]]) -> list[Question]:
        data = await self._request("POST", QUESTIONS_PATH, {"responses": responses})
        try:
            return parse_dynamic_questions(data.get("ai_questions") or [])
        except ValidationError as e:
            raise BackendError(f"Malformed follow-up questions: {e}") from e

    async def submit_ai(self, responses: list[dict[str, str]]) -> list[Recommendation]:
        data = await self._request("POST", AI_QUESTIONS_PATH, {"responses": responses})

        # Missing outer or inner "recommendations" means no courses, not an error
        envelope = data.get("recommendations") or {}
        if not isinstance(envelope, dict):
            raise BackendError("Malformed recommendations payload")
        try:
            return [Recommendation.model_validate(r) for r in envelope.get("recommendations") or []]
        except ValidationError as e:
            raise BackendError(f"Malformed recommendation: {e}") from e

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _request(self, method: str, path: str, body: dict | None = None) -> dict[str, Any]:
        logger.debug(f"{method} {self.base_url}{path}")
        try:
            response = await self._client.request(method, path, json=body)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise BackendError(f"Request to {path} failed: {e}") from e

        if response.is_error:
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise BackendError(
                f"{path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise BackendError(f"{path} returned invalid JSON", status_code=response.status_code) from e

        if not isinstance(data, dict):
            raise BackendError(f"{path} returned {type(data).__name__}, expected object")
        return data
