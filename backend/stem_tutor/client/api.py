"""
STEM Tutor - API Client
Async httpx client for the flashcards / subjects / progress service
"""
import logging
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from stem_tutor.schemas.flashcard import FlashcardResponse
from stem_tutor.schemas.progress import ProgressResponse
from stem_tutor.schemas.subject import SubjectResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3001/api"

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiError(Exception):
    """The service answered with a non-2xx status or a malformed body."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class TutorApiClient:
    """
    Thin typed wrapper over the HTTP surface.

    Usage:
        async with TutorApiClient("http://localhost:3001/api") as api:
            cards = await api.list_flashcards()

    Pass ``transport`` (e.g. ``httpx.ASGITransport(app=app)``) to talk to an
    in-process app.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = client is None
        self._http = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
        )

    async def __aenter__(self) -> "TutorApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        response = await self._http.request(method, path, json=json)
        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            detail = body.get("detail", response.text) if isinstance(body, dict) else response.text
            logger.debug("%s %s failed with %s: %s", method, path, response.status_code, detail)
            raise ApiError(response.status_code, str(detail))
        if body is None:
            raise ApiError(response.status_code, f"Malformed response from {method} {path}: not JSON")
        return body

    @staticmethod
    def _parse(model: Type[ModelT], data: Any) -> ModelT:
        """Validate a response body; a malformed body is reported as ApiError."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiError(200, f"Malformed {model.__name__}: {e.error_count()} validation errors") from e

    @classmethod
    def _parse_list(cls, model: Type[ModelT], data: Any) -> List[ModelT]:
        if not isinstance(data, list):
            raise ApiError(200, f"Malformed response: expected a list of {model.__name__}")
        return [cls._parse(model, item) for item in data]

    # Flashcards

    async def list_flashcards(self) -> List[FlashcardResponse]:
        return self._parse_list(FlashcardResponse, await self._request("GET", "/flashcards"))

    async def create_flashcard(
        self,
        question: str,
        answer: str,
        subject: str,
        difficulty: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> FlashcardResponse:
        payload = {"question": question, "answer": answer, "subject": subject}
        if difficulty is not None:
            payload["difficulty"] = difficulty
        if tags is not None:
            payload["tags"] = tags
        data = await self._request("POST", "/flashcards", json=payload)
        return self._parse(FlashcardResponse, data)

    async def update_flashcard(self, card_id: str, **fields: Any) -> FlashcardResponse:
        """Send only the given fields; the server keeps the rest."""
        data = await self._request("PUT", f"/flashcards/{card_id}", json=fields)
        return self._parse(FlashcardResponse, data)

    async def delete_flashcard(self, card_id: str) -> str:
        data = await self._request("DELETE", f"/flashcards/{card_id}")
        return data.get("message", "") if isinstance(data, dict) else ""

    async def review_flashcard(self, card_id: str, correct: bool) -> FlashcardResponse:
        data = await self._request("POST", f"/flashcards/{card_id}/review", json={"correct": correct})
        return self._parse(FlashcardResponse, data)

    # Subjects

    async def list_subjects(self) -> List[SubjectResponse]:
        return self._parse_list(SubjectResponse, await self._request("GET", "/subjects"))

    async def create_subject(
        self,
        name: str,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> SubjectResponse:
        payload = {"name": name}
        if icon is not None:
            payload["icon"] = icon
        if color is not None:
            payload["color"] = color
        data = await self._request("POST", "/subjects", json=payload)
        return self._parse(SubjectResponse, data)

    # Progress

    async def get_progress(self) -> ProgressResponse:
        return self._parse(ProgressResponse, await self._request("GET", "/progress"))

    async def update_progress(self, **fields: Any) -> ProgressResponse:
        """Keys use the wire names, e.g. ``update_progress(totalXP=150)``."""
        data = await self._request("PUT", "/progress", json=fields)
        return self._parse(ProgressResponse, data)

    async def health(self) -> dict:
        return await self._request("GET", "/health")
