"""BlogHub API - FastAPI application."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from bloghub.api.api import api_router
from bloghub.api.deps import enforce_rate_limit
from bloghub.core.config import Settings, settings as default_settings
from bloghub.core.exceptions import register_exception_handlers
from bloghub.core.logging import setup_logging
from bloghub.core.rate_limiter import FixedWindowRateLimiter
from bloghub.db.session import Database

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-DNS-Prefetch-Control": "off",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(settings)
        app.state.db = db
        if settings.AUTO_CREATE_TABLES:
            await db.create_tables()
        try:
            await db.ping()
            logger.info("Database: OK")
        except Exception as e:
            logger.warning("Database connection failed: %s", e)
        logger.info("API: /api | Docs: /api-docs | Health: /health | Ready (DB): /ready")
        yield
        await db.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/api-docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.rate_limiter = (
        FixedWindowRateLimiter(settings.RATE_LIMIT_MAX_REQUESTS, settings.RATE_LIMIT_WINDOW_SECONDS)
        if settings.RATE_LIMIT_ENABLED
        else None
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    register_exception_handlers(app, show_detail=settings.is_development)
    app.include_router(api_router, prefix="/api", dependencies=[Depends(enforce_rate_limit)])

    @app.get("/health")
    async def health():
        return {
            "success": True,
            "message": "Blog API is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/ready")
    async def ready():
        """Health check including DB - use to verify backend is fully operational."""
        try:
            await app.state.db.ping()
            return {"success": True, "database": "connected"}
        except Exception as e:
            return JSONResponse(
                status_code=503,
                content={"success": False, "message": "Database unavailable", "errors": [str(e)]},
            )

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_app()
