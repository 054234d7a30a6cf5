# app/main.py
"""
FastAPI application entry point.
Builds the store + session store once per process, wires error handlers,
request logging, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from app.routers import bars, auth, refresh, health
from app.config import Settings, settings as default_settings
from app.errors import BarCountError, NotFoundError, ValidationError
from app.services.session_store import MemorySessionStore
from app.storage import create_storage
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)


def create_app(settings: Settings = None, storage=None, sessions=None) -> FastAPI:
    """
    Build the app. Tests pass their own settings/storage for isolation;
    production uses the module-level `app` below.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Bar Occupancy API",
        description="Managers report live headcounts; the public polls occupancy.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.storage = storage if storage is not None else create_storage(settings)
    app.state.sessions = sessions if sessions is not None else MemorySessionStore(settings.SESSION_TTL_SECONDS)

    # ── CORS (credentials allowed so the session cookie travels) ────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Request Timing Middleware ────────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
        return response

    # ── Error Handlers ───────────────────────────────────────────────────────
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=exc.status_code,
                            content={"message": exc.message, "errors": exc.errors})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        err = ValidationError.from_pydantic(exc)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                            content={"message": err.message, "errors": err.errors})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return PlainTextResponse(exc.message or "Not found", status_code=exc.status_code)

    @app.exception_handler(BarCountError)
    async def domain_error_handler(request: Request, exc: BarCountError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(bars.router,    prefix="/api", tags=["🍺 Bars"])
    app.include_router(auth.router,    prefix="/api", tags=["🔑 Auth"])
    app.include_router(refresh.router, prefix="/api", tags=["🔄 Refresh"])
    app.include_router(health.router,  prefix="/api", tags=["💚 Health"])

    # ── Startup ──────────────────────────────────────────────────────────────
    @app.on_event("startup")
    async def startup():
        logger.info("🚀 Bar Occupancy Backend starting up...")
        logger.info(f"🍺 Tracking {len(app.state.storage.get_all_bars())} bars")
        logger.info(f"🔒 Per-bar ownership check: {'on' if settings.ENFORCE_BAR_OWNERSHIP else 'off'}")
        logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
        logger.info("📖 API docs at /docs")

    @app.on_event("shutdown")
    async def shutdown():
        logger.info("🛑 Bar Occupancy Backend shutting down...")

    return app


app = create_app()
