"""CLI entrypoint for oasst-client."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx
import rich_click as click

from oasst_client import __version__
from oasst_client.config import ConfigurationError
from oasst_client.controllers import (
    AckTaskCommand,
    ApiCliController,
    ApiConnection,
    FetchTaskCommand,
    InteractTaskCommand,
    NackTaskCommand,
    UserOptions,
)
from oasst_client.errors import OasstError

click.rich_click.USE_MARKDOWN = True
API_CONTROLLER = ApiCliController()


def _user_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option("--user-email", default=None, help="Fallback display name.")(func)
    func = click.option("--user-name", default=None, help="Display name sent to the backend.")(
        func
    )
    return click.option("--user-id", required=True, help="Identity token subject.")(func)


@click.group()
@click.version_option(version=__version__, prog_name="oasst-client")
@click.option("--api-url", default=None, help="Backend base URL. Overrides OASST_API_URL.")
@click.option("--api-key", default=None, help="Backend API key. Overrides OASST_API_KEY.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log requests to stderr.")
@click.pass_context
def oasst_client(
    ctx: click.Context,
    api_url: str | None,
    api_key: str | None,
    verbose: bool,
) -> None:
    """Open-Assistant backend API client."""

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = ApiConnection(api_url=api_url, api_key=api_key)


@oasst_client.group()
def tasks() -> None:
    """Task commands."""


@tasks.command("fetch")
@click.option("--type", "task_type", default="random", show_default=True, help="Task type.")
@_user_options
@click.pass_obj
def tasks_fetch(
    connection: ApiConnection,
    task_type: str,
    user_id: str,
    user_name: str | None,
    user_email: str | None,
) -> None:
    """Request a new task for a user."""

    _emit(
        lambda: API_CONTROLLER.fetch_task(
            FetchTaskCommand(
                connection=connection,
                task_type=task_type,
                user=UserOptions(user_id=user_id, user_name=user_name, user_email=user_email),
            ),
        ),
    )


@tasks.command("ack")
@click.argument("task_id")
@click.argument("message_id")
@click.pass_obj
def tasks_ack(connection: ApiConnection, task_id: str, message_id: str) -> None:
    """Acknowledge a task with the id of the message it produced."""

    _emit(
        lambda: API_CONTROLLER.ack_task(
            AckTaskCommand(connection=connection, task_id=task_id, message_id=message_id),
        ),
    )


@tasks.command("nack")
@click.argument("task_id")
@click.option("--reason", required=True, help="Why the task was rejected.")
@click.pass_obj
def tasks_nack(connection: ApiConnection, task_id: str, reason: str) -> None:
    """Reject a task."""

    _emit(
        lambda: API_CONTROLLER.nack_task(
            NackTaskCommand(connection=connection, task_id=task_id, reason=reason),
        ),
    )


@tasks.command("interact")
@click.argument("update_type")
@click.argument("task_id")
@click.argument("message_id")
@click.argument("user_message_id")
@click.option(
    "--content",
    default="{}",
    show_default=True,
    help="JSON object merged into the request body, for example '{\"text\": \"hi\"}'.",
)
@_user_options
@click.pass_obj
def tasks_interact(
    connection: ApiConnection,
    update_type: str,
    task_id: str,
    message_id: str,
    user_message_id: str,
    content: str,
    user_id: str,
    user_name: str | None,
    user_email: str | None,
) -> None:
    """Record an interaction with a task."""

    parsed_content = _parse_content(content)
    _emit(
        lambda: API_CONTROLLER.interact_task(
            InteractTaskCommand(
                connection=connection,
                update_type=update_type,
                task_id=task_id,
                message_id=message_id,
                user_message_id=user_message_id,
                content=parsed_content,
                user=UserOptions(user_id=user_id, user_name=user_name, user_email=user_email),
            ),
        ),
    )


@oasst_client.command("labels")
@click.pass_obj
def labels(connection: ApiConnection) -> None:
    """Show the valid labels for messages."""

    _emit(lambda: API_CONTROLLER.valid_labels(connection))


@oasst_client.command("leaderboard")
@click.pass_obj
def leaderboard(connection: ApiConnection) -> None:
    """Show the current leaderboard ranking."""

    _emit(lambda: API_CONTROLLER.leaderboard(connection))


def _parse_content(value: str) -> dict[str, Any]:
    try:
        content = json.loads(value)
    except ValueError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--content") from exc
    if not isinstance(content, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--content")
    return content


def _emit(run: Callable[[], list[str]]) -> None:
    try:
        lines = run()
    except OasstError as exc:
        raise click.ClickException(str(exc)) from exc
    except httpx.TransportError as exc:
        raise click.ClickException(f"backend unreachable: {exc}") from exc
    except ConfigurationError as exc:
        raise click.UsageError(str(exc)) from exc
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    oasst_client()
