"""
Security utilities: validation of Supabase-issued JWT access tokens.
"""

from jose import jwt, JWTError

from academy.config import get_settings


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a Supabase JWT. Returns payload or None if invalid.

    Supabase signs session tokens with the project's JWT secret and sets
    the audience to "authenticated" for signed-in users.
    """
    settings = get_settings()
    if not settings.SUPABASE_JWT_SECRET:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
        return payload
    except JWTError:
        return None
