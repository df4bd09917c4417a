"""
FastAPI dependency injection functions.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from stripe import StripeClient
from supabase import Client

from academy.core.database import get_supabase_admin_client, get_supabase_client
from academy.core.payments_client import get_stripe_client
from academy.core.security import decode_access_token

# Bearer token scheme for Swagger UI
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Client:
    """Dependency: get the service-role Supabase client.

    Handlers scope every query by the authenticated user themselves.
    """
    return get_supabase_admin_client()


def get_public_db() -> Client:
    """Dependency: get the anon Supabase client (auth flows)."""
    return get_supabase_client()


def get_stripe() -> StripeClient:
    """Dependency: get the Stripe client."""
    return get_stripe_client()


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> str:
    """Dependency: extract and validate user_id from the Supabase JWT.

    Returns:
        str: The user's UUID as string.

    Raises:
        HTTPException 401: If token is invalid or expired.
    """
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token does not identify a user",
        )

    return user_id


async def get_optional_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer_scheme),
) -> str | None:
    """Dependency: user_id when a valid token is present, else None.

    For endpoints that answer anonymous callers with an envelope instead of 401.
    """
    if credentials is None:
        return None
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        return None
    return payload.get("sub") or None


async def require_admin(
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
) -> str:
    """Dependency: only let through users whose profile role is 'admin'."""
    result = (
        db.table("profiles")
        .select("role")
        .eq("id", user_id)
        .maybe_single()
        .execute()
    )
    profile = result.data if result else None
    if not profile or profile.get("role") != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Root clearance required for this node.",
        )
    return user_id
