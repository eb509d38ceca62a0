"""Async HTTP client for the backend task API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from oasst_client.config import Settings
from oasst_client.errors import OasstError
from oasst_client.identity import UserIdentity

logger = logging.getLogger(__name__)

JsonPayload = Any

TASKS_PATH = "/api/v1/tasks/"
INTERACTION_PATH = "/api/v1/tasks/interaction"
VALID_LABELS_PATH = "/api/v1/text_labels/valid_labels"
LEADERBOARD_PATH = "/api/v1/experimental/leaderboards/create/assistant"


class OasstApiClient:
    """Forwards task requests to the backend and maps failure statuses to `OasstError`.

    Payloads are passed through as raw JSON; callers narrow them into their own types.
    Transport failures (`httpx.TransportError`) are not wrapped.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))

    @property
    def api_url(self) -> str:
        return self._api_url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> OasstApiClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "X-API-Key": self._api_key,
            "Content-Type": "application/json",
        }

    async def _post(self, path: str, body: JsonPayload) -> JsonPayload:
        logger.debug("POST %s", path)
        response = await self._client.post(
            f"{self._api_url}{path}",
            headers=self._headers(),
            content=json.dumps(body),
        )
        return _handle_response(path, response)

    async def _get(self, path: str) -> JsonPayload:
        logger.debug("GET %s", path)
        response = await self._client.get(f"{self._api_url}{path}", headers=self._headers())
        return _handle_response(path, response)

    # Tasks are stored raw by callers, so no typed model is built here.
    async def fetch_task(self, task_type: str, user_token: Mapping[str, Any]) -> JsonPayload:
        return await self._post(
            TASKS_PATH,
            {
                "type": task_type,
                "user": UserIdentity.from_token(user_token).to_payload(),
            },
        )

    async def ack_task(self, task_id: str, message_id: str) -> None:
        await self._post(f"/api/v1/tasks/{task_id}/ack", {"message_id": message_id})

    async def nack_task(self, task_id: str, reason: str) -> None:
        await self._post(f"/api/v1/tasks/{task_id}/nack", {"reason": reason})

    async def interact_task(
        self,
        update_type: str,
        task_id: str,
        message_id: str,
        user_message_id: str,
        content: Mapping[str, Any],
        user_token: Mapping[str, Any],
    ) -> JsonPayload:
        """Record an interaction with a task; the response is usually the next task.

        Keys in ``content`` are written after the envelope fields and win on collision.
        """

        return await self._post(
            INTERACTION_PATH,
            {
                "type": update_type,
                "user": UserIdentity.from_token(user_token).to_payload(),
                "task_id": task_id,
                "message_id": message_id,
                "user_message_id": user_message_id,
                **content,
            },
        )

    async def fetch_valid_labels(self) -> JsonPayload:
        """Return the valid labels for messages."""

        return await self._get(VALID_LABELS_PATH)

    async def fetch_leaderboard(self) -> JsonPayload:
        """Return the current leaderboard ranking."""

        return await self._get(LEADERBOARD_PATH)


def build_client(
    settings: Settings,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> OasstApiClient:
    """Build the shared client once at startup; pass it to callers explicitly."""

    return OasstApiClient(
        settings.api.api_url,
        settings.api.api_key,
        http_client=http_client,
        timeout_seconds=settings.api.request_timeout_seconds,
    )


def _handle_response(path: str, response: httpx.Response) -> JsonPayload:
    if response.status_code == httpx.codes.NO_CONTENT:
        return None

    if response.status_code >= httpx.codes.MULTIPLE_CHOICES:
        logger.warning("Backend returned HTTP %d for %s", response.status_code, path)
        raise _error_from_response(response)

    return response.json()


def _error_from_response(response: httpx.Response) -> OasstError:
    error_text = response.text
    try:
        error = json.loads(error_text)
    except ValueError:
        return OasstError(error_text, 0, response.status_code)

    if not isinstance(error, dict):
        return OasstError(error, None, response.status_code)
    message = error.get("message")
    return OasstError(
        error if message is None else message,
        error.get("error_code"),
        response.status_code,
    )
