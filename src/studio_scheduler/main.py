from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studio_scheduler.api.routes import api_router
from studio_scheduler.core.config import get_settings
from studio_scheduler.core.exceptions import register_exception_handlers
from studio_scheduler.core.logging import configure_logging


def create_application() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        description="API for managing studio hosts and generating shift rosters.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root() -> dict[str, bool | str]:
        return {"ok": True, "msg": "Studio scheduler backend running"}

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Simple health endpoint for infrastructure monitoring."""
        return {"status": "ok"}

    return app


app = create_application()
