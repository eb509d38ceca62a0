"""Async client for the Open-Assistant backend task API."""

from oasst_client.client import OasstApiClient, build_client
from oasst_client.errors import OasstError
from oasst_client.identity import UserIdentity

__version__ = "0.1.0"

__all__ = [
    "OasstApiClient",
    "OasstError",
    "UserIdentity",
    "__version__",
    "build_client",
]
