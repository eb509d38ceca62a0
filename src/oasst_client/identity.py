"""User identity sent along with task requests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class UserIdentity:
    """Backend view of the caller, derived from an identity token.

    Missing claims are sent as null rather than omitted.
    """

    id: str | None
    display_name: str | None
    auth_method: str = "local"

    @classmethod
    def from_token(cls, token: Mapping[str, Any]) -> UserIdentity:
        return cls(
            id=token.get("sub"),
            display_name=token.get("name") or token.get("email"),
        )

    def to_payload(self) -> dict[str, str | None]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "auth_method": self.auth_method,
        }
