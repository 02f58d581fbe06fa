"""Authentication dependencies.

Bearer tokens are verified by the identity provider (Supabase auth). Each
request gets a user-scoped client so row-level security applies to every
store call made on the user's behalf.
"""

import structlog
from fastapi import Depends, Header
from supabase import Client, create_client

from apps.api.core.config import settings
from apps.api.core.errors import AuthenticationError

logger = structlog.get_logger()


def _get_supabase_url() -> str:
    if not settings.SUPABASE_URL:
        raise RuntimeError("SUPABASE_URL is not configured")
    return settings.SUPABASE_URL


def _get_supabase_anon_key() -> str:
    if not settings.SUPABASE_ANON_KEY:
        raise RuntimeError("SUPABASE_ANON_KEY is not configured")
    return settings.SUPABASE_ANON_KEY


async def get_user_token(authorization: str = Header(default="")) -> str:
    """Extract Bearer token from Authorization header.

    Returns the raw JWT string.
    """
    if not authorization.startswith("Bearer "):
        raise AuthenticationError(
            "Missing or invalid Authorization header. Expected: Bearer <token>"
        )

    token = authorization[7:].strip()
    if not token:
        raise AuthenticationError("Missing bearer token")
    return token


async def get_user_client(token: str = Depends(get_user_token)) -> Client:
    """Provide a Supabase client authenticated with the user's JWT.

    An empty refresh token is passed: the gateway is stateless and every
    request carries a fresh access token, so the backend never refreshes.
    """
    client = create_client(_get_supabase_url(), _get_supabase_anon_key())
    client.auth.set_session(token, "")
    return client


async def get_current_user_id(client: Client = Depends(get_user_client)) -> str:
    """Resolve the stable user id behind the bearer token."""
    user_response = client.auth.get_user()
    if not user_response or not user_response.user:
        logger.warning("auth_rejected")
        raise AuthenticationError("Invalid bearer token")
    return str(user_response.user.id)
