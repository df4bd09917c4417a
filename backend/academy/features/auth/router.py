"""
Auth feature: API routes.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from supabase import Client

from academy.config import get_settings
from academy.core.dependencies import get_db, get_public_db, get_current_user_id
from academy.core.schemas import ActionResult
from academy.features.auth.schemas import MagicLinkRequest, ProfileResponse
from academy.features.auth.service import AuthService

router = APIRouter()


@router.post("/magic-link", response_model=ActionResult)
async def send_magic_link(
    data: MagicLinkRequest,
    request: Request,
    db: Client = Depends(get_public_db),
):
    """Email a passwordless sign-in link.

    The redirect URL must be whitelisted in Supabase Auth > Redirect URLs.
    """
    service = AuthService(db)
    origin = (request.headers.get("origin") or get_settings().SITE_URL).rstrip("/")
    return service.send_magic_link(data.email, f"{origin}{data.redirect_path}")


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Current user's profile (role, paid status)."""
    service = AuthService(db)
    profile = service.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile
