"""
Centenarian Academy - FastAPI Application Entry Point.

Feature-based modular architecture:
  Each feature in academy/features/ has its own router, service, and schemas.
  Adding a new feature = adding a new folder, no existing code changes needed.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from academy.config import get_settings
from academy.background.scheduler import start_scheduler, shutdown_scheduler

# ── Feature Routers ──────────────────────────────────────
from academy.features.auth.router import router as auth_router
from academy.features.playback.router import router as playback_router
from academy.features.transcripts.router import router as transcripts_router
from academy.features.curriculum.router import router as curriculum_router
from academy.features.recommendations.router import router as recommendations_router
from academy.features.payments.router import router as payments_router
from academy.features.payments.router import webhook_router
from academy.features.admin.router import router as admin_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup & shutdown."""
    settings = get_settings()
    print(f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} starting...")
    print(f"🧠 Embeddings: {settings.EMBEDDING_PROVIDER} ({settings.EMBEDDING_MODEL}, {settings.EMBEDDING_DIMENSIONS} dims)")
    print(f"🔗 Supabase: {settings.SUPABASE_URL[:40]}...")
    start_scheduler()
    yield
    shutdown_scheduler()
    print("👋 Shutting down...")


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Paywalled CPT video curriculum with semantic navigation",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Register Feature Routers ─────────────────────────
    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(playback_router, prefix="/api/videos", tags=["Playback"])
    app.include_router(transcripts_router, prefix="/api/transcripts", tags=["Transcripts"])
    app.include_router(curriculum_router, prefix="/api/curriculum", tags=["Curriculum"])
    app.include_router(recommendations_router, prefix="/api/recommendations", tags=["Recommendations"])
    app.include_router(payments_router, prefix="/api/payments", tags=["Payments"])
    app.include_router(webhook_router, prefix="/api/webhooks", tags=["Webhooks"])
    app.include_router(admin_router, prefix="/api/admin", tags=["Admin"])

    # ── Health Check ─────────────────────────────────────
    @app.get("/health", tags=["System"])
    async def health_check():
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    return app


app = create_app()
