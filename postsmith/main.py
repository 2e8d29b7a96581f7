"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from postsmith import __version__
from postsmith.config import get_settings
from postsmith.database import dispose_engine, init_db
from postsmith.factories.service_factories import build_components

# Import routers
from postsmith.routers import dashboard, generate, health, history, profile, users

# Import middleware
from postsmith.middleware import logging_middleware, register_exception_handlers
from postsmith.utils.logger import configure_logging, get_logger

settings = get_settings()

# Configure logging early
configure_logging(log_level=settings.log_level, debug=settings.debug)
log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    log.info(
        "starting application",
        debug=settings.debug,
        log_level=settings.log_level,
        store_backend=settings.store_backend,
    )
    if settings.store_backend == "postgres":
        await init_db()
        log.info("database initialized")

    # Configure LiteLLM
    import litellm

    litellm.suppress_debug_info = True
    litellm.set_verbose = False

    # Cache, guest tracker and rate limiter live for the process lifetime
    app.state.components = build_components(settings)

    yield

    log.info("shutting down application")
    if settings.store_backend == "postgres":
        await dispose_engine()
        log.info("database connections closed")


app = FastAPI(
    title="Postsmith API",
    description="Postsmith - AI social post generation with usage governance",
    version=__version__,
    lifespan=lifespan,
)

# Register exception handlers first
register_exception_handlers(app)

# CORS middleware (must be first in middleware stack)
_cors_origins = settings.get_cors_origins_list()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins or ["*"],
    allow_credentials=bool(_cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request logging middleware (binds the request id)
app.middleware("http")(logging_middleware)

# Register routers
app.include_router(health.router, prefix=settings.api_prefix, tags=["Health"])
app.include_router(generate.router, prefix=settings.api_prefix, tags=["Generation"])
app.include_router(history.router, prefix=settings.api_prefix, tags=["History"])
app.include_router(profile.router, prefix=settings.api_prefix, tags=["Profile"])
app.include_router(dashboard.router, prefix=settings.api_prefix, tags=["Dashboard"])
app.include_router(users.router, prefix=settings.api_prefix, tags=["Users"])


@app.get("/")
async def root():
    """Root endpoint with API information."""
    prefix = settings.api_prefix
    return {
        "name": "Postsmith API",
        "version": __version__,
        "endpoints": {
            "health": f"{prefix}/health",
            "generate": f"{prefix}/generate",
            "refine": f"{prefix}/refine",
            "history": f"{prefix}/history",
            "profile": f"{prefix}/profile",
            "dashboard": f"{prefix}/dashboard",
            "me": f"{prefix}/me",
        },
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "postsmith.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
