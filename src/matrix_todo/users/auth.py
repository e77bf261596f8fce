"""Bearer-token authentication against Supabase Auth."""

import logging

from fastapi import HTTPException, Request
from supabase import AuthError

from matrix_todo.store.client import get_supabase_client

logger = logging.getLogger(__name__)


async def current_user_id(request: Request) -> str:
    """Resolve the calling user from the ``Authorization: Bearer <jwt>`` header.

    Raises HTTPException 401 if the header is missing or the token is rejected.
    """
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Unauthorized")

    client = await get_supabase_client()
    try:
        response = await client.auth.get_user(token)
    except AuthError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise HTTPException(status_code=401, detail="Authentication failed") from exc

    if response is None or response.user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return response.user.id
