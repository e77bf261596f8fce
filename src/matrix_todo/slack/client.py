"""Async Slack Web API clients, one per workspace access token.

Each Slack connection carries its own OAuth access token, so clients are
cached per token rather than as a single bot-token singleton.
"""

from slack_sdk.web.async_client import AsyncWebClient

_clients: dict[str, AsyncWebClient] = {}


def get_slack_client(access_token: str) -> AsyncWebClient:
    """Return a cached async Slack client for ``access_token``.

    Creates the client on first use of a token. Subsequent calls with the
    same token return the cached instance.
    """
    client = _clients.get(access_token)
    if client is None:
        client = AsyncWebClient(token=access_token)
        _clients[access_token] = client
    return client


def reset_clients() -> None:
    """Drop all cached clients. Used for testing and on connection removal."""
    _clients.clear()
