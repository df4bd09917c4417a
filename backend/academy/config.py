"""
Application configuration using Pydantic Settings.
All config is loaded from environment variables / .env file.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "centenarian-academy"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    CORS_ORIGINS: str = "http://localhost:3000"  # comma-separated
    SITE_URL: str = "http://localhost:3000"  # fallback when the request has no Origin

    # ── Supabase ─────────────────────────────────────────
    SUPABASE_URL: str
    SUPABASE_KEY: str  # anon/public key
    SUPABASE_SERVICE_KEY: str = ""  # service_role key (for admin ops)

    # ── Auth (Supabase-issued JWT) ───────────────────────
    SUPABASE_JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"

    # ── Embedding ────────────────────────────────────────
    EMBEDDING_PROVIDER: str = "gemini"
    EMBEDDING_MODEL: str = "gemini-embedding-001"
    EMBEDDING_API_KEY: str = ""
    EMBEDDING_DIMENSIONS: int = 1536  # must match the videos.embedding column
    EMBEDDING_MAX_CHARS: int = 30000
    EMBEDDING_RATE_LIMIT_DELAY: float = 1.0  # seconds between bulk items

    # ── Recommendations (Crossroads) ─────────────────────
    RECOMMENDATION_MATCH_THRESHOLD: float = 0.5
    RECOMMENDATION_COUNT: int = 2

    # ── Stripe ───────────────────────────────────────────
    STRIPE_SECRET_KEY: str = ""
    STRIPE_WEBHOOK_SECRET: str = ""
    STRIPE_API_VERSION: str = ""  # empty = account default

    # ── Course product ───────────────────────────────────
    COURSE_PRICE_CENTS: int = 10000  # $100.00
    COURSE_CURRENCY: str = "usd"
    COURSE_PRODUCT_NAME: str = "Centenarian Athlete Academy: Full CPT Access"
    COURSE_PRODUCT_DESCRIPTION: str = (
        "Lifelong access to the non-linear CPT curriculum, study guides, and flashcards."
    )
    COURSE_PRODUCT_IMAGE: str = ""

    # ── Cloudinary ───────────────────────────────────────
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    SIGNED_URL_TTL_SECONDS: int = 3600

    # ── Playback ─────────────────────────────────────────
    WATCH_COMPLETION_THRESHOLD: float = 90.0  # percent watched = completed

    # ── Background ───────────────────────────────────────
    EMBEDDING_SWEEP_INTERVAL_MINUTES: int = 0  # 0 = disabled

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (singleton)."""
    return Settings()
