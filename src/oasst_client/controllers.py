"""Controllers for backend API CLI commands."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any

from oasst_client.client import OasstApiClient, build_client
from oasst_client.config import Settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApiConnection:
    """CLI overrides for backend endpoint settings."""

    api_url: str | None = None
    api_key: str | None = None


@dataclass(slots=True)
class UserOptions:
    """CLI inputs that stand in for a pre-obtained identity token."""

    user_id: str
    user_name: str | None = None
    user_email: str | None = None

    def to_token(self) -> dict[str, Any]:
        token: dict[str, Any] = {"sub": self.user_id}
        if self.user_name:
            token["name"] = self.user_name
        if self.user_email:
            token["email"] = self.user_email
        return token


@dataclass(slots=True)
class FetchTaskCommand:
    """CLI inputs for task fetch command."""

    connection: ApiConnection
    task_type: str
    user: UserOptions


@dataclass(slots=True)
class AckTaskCommand:
    """CLI inputs for task ack command."""

    connection: ApiConnection
    task_id: str
    message_id: str


@dataclass(slots=True)
class NackTaskCommand:
    """CLI inputs for task nack command."""

    connection: ApiConnection
    task_id: str
    reason: str


@dataclass(slots=True)
class InteractTaskCommand:
    """CLI inputs for task interaction command."""

    connection: ApiConnection
    update_type: str
    task_id: str
    message_id: str
    user_message_id: str
    content: dict[str, Any]
    user: UserOptions


class ApiCliController:
    """Coordinates backend API command execution."""

    def fetch_task(self, command: FetchTaskCommand) -> list[str]:
        return self._execute(
            command.connection,
            lambda client: client.fetch_task(command.task_type, command.user.to_token()),
        )

    def ack_task(self, command: AckTaskCommand) -> list[str]:
        return self._execute(
            command.connection,
            lambda client: client.ack_task(command.task_id, command.message_id),
        )

    def nack_task(self, command: NackTaskCommand) -> list[str]:
        return self._execute(
            command.connection,
            lambda client: client.nack_task(command.task_id, command.reason),
        )

    def interact_task(self, command: InteractTaskCommand) -> list[str]:
        return self._execute(
            command.connection,
            lambda client: client.interact_task(
                command.update_type,
                command.task_id,
                command.message_id,
                command.user_message_id,
                command.content,
                command.user.to_token(),
            ),
        )

    def valid_labels(self, connection: ApiConnection) -> list[str]:
        return self._execute(connection, lambda client: client.fetch_valid_labels())

    def leaderboard(self, connection: ApiConnection) -> list[str]:
        return self._execute(connection, lambda client: client.fetch_leaderboard())

    def _execute(
        self,
        connection: ApiConnection,
        call: Callable[[OasstApiClient], Awaitable[Any]],
    ) -> list[str]:
        settings = _settings(connection)
        settings.validate_for_api()
        logger.debug("Using backend %s", settings.api.api_url)

        async def _run() -> Any:
            async with build_client(settings) as client:
                return await call(client)

        return _format_result(asyncio.run(_run()))


def _settings(connection: ApiConnection) -> Settings:
    settings = Settings.from_env()
    api = settings.api
    if connection.api_url:
        api = replace(api, api_url=connection.api_url)
    if connection.api_key:
        api = replace(api, api_key=connection.api_key)
    return replace(settings, api=api)


def _format_result(result: Any) -> list[str]:
    if result is None:
        return ["ok"]
    return json.dumps(result, indent=2, ensure_ascii=False).splitlines()
