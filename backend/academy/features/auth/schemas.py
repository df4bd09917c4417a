"""
Auth feature: Pydantic schemas for request/response models.
"""

from pydantic import BaseModel, EmailStr


# ── Requests ─────────────────────────────────────────────
class MagicLinkRequest(BaseModel):
    email: EmailStr
    redirect_path: str = "/dashboard"


# ── Responses ────────────────────────────────────────────
class ProfileResponse(BaseModel):
    id: str
    email: str | None = None
    role: str = "student"
    is_paid: bool = False
