"""Keyed Labyrinth API - Main FastAPI Application."""

import logging
import time
import uuid
from contextlib import asynccontextmanager

import redis.asyncio as redis
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from labyrinth.config import get_settings
from labyrinth.api.routes import maze, session
from labyrinth.db.redis import close_redis, get_redis, ping_redis
from labyrinth.services.maze_registry import get_maze_registry

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("labyrinth")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests with correlation IDs.

    A caller-supplied X-Request-ID is reused as is.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        start_time = time.time()

        # Add request ID to request state for use in handlers
        request.state.request_id = request_id

        logger.info(
            f"[{request_id}] --> {request.method} {request.url.path} "
            f"from {request.client.host if request.client else 'unknown'}"
        )

        try:
            response = await call_next(request)
            process_time = (time.time() - start_time) * 1000

            logger.info(
                f"[{request_id}] <-- {response.status_code} "
                f"({process_time:.2f}ms)"
            )

            # Add request ID to response headers
            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            process_time = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] <-- ERROR: {type(e).__name__}: {str(e)} "
                f"({process_time:.2f}ms)"
            )
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"Starting {settings.app_name} API...")

    # Startup: load maze files
    if settings.mazes_dir.is_dir():
        get_maze_registry().load_directory(settings.mazes_dir, settings)
    else:
        logger.warning(f"Mazes directory not found: {settings.mazes_dir}")

    yield

    # Shutdown
    await close_redis()
    logger.info(f"{settings.app_name} API stopped")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Shortest paths and live play through mazes with keys and locked doors",
    lifespan=lifespan,
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# CORS middleware - configured based on environment
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check(redis_client: redis.Redis = Depends(get_redis)) -> dict:
    """Health check endpoint. Reports whether the session store is reachable."""
    return {
        "status": "ok",
        "version": settings.app_version,
        "mazes": len(get_maze_registry()),
        "redis": "ok" if await ping_redis(redis_client) else "unavailable",
    }


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


# Include routers
app.include_router(maze.router, prefix="/v1")
app.include_router(session.router, prefix="/v1")
