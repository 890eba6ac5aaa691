"""Maze Walker API - Main FastAPI Application."""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from mazewalker.api.routes import solutions, solve
from mazewalker.config import get_settings
from mazewalker.core.image_decoder import MazeDecodeError
from mazewalker.services.image_loader import ImageLoadError

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("maze_walker")


def unprocessable_image_handler(request: Request, exc: Exception):
    """Handle images that cannot be read or decoded into a maze."""
    logger.warning(f"Rejected image on {request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request and its outcome with the route and a short correlation ID."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        route = f"{request.method} {request.url.path}"
        start_time = time.time()

        request.state.request_id = request_id

        logger.info(
            f"[{request_id}] --> {route} "
            f"from {request.client.host if request.client else 'unknown'}"
        )

        try:
            response = await call_next(request)
            process_time = (time.time() - start_time) * 1000

            logger.info(
                f"[{request_id}] <-- {route} {response.status_code} "
                f"({process_time:.2f}ms)"
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            process_time = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] <-- {route} ERROR: {type(e).__name__}: {str(e)} "
                f"({process_time:.2f}ms)"
            )
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Maze Walker API...")
    logger.info(f"Solutions directory: {settings.solutions_dir.resolve()}")

    yield

    logger.info("Shutting down Maze Walker API...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Decode maze images and walk them with the right-hand rule",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_exception_handler(MazeDecodeError, unprocessable_image_handler)
app.add_exception_handler(ImageLoadError, unprocessable_image_handler)

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
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


# Include routers
app.include_router(solve.router, prefix="/v1")
app.include_router(solutions.router, prefix="/v1")
