"""
RK Media Server v1.0.0 - FastAPI Application
Main application entry point
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .database import init_db
from .errors import MediaError
from .services import FFProbe, LibraryLocks
from .services.paths import resolve_base

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager
    Runs on startup and shutdown
    """
    # Startup
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting %s v%s", settings.APP_NAME, settings.VERSION)

    # Raises StartupError when no base directory exists; the server must not start
    app.state.base_dir = resolve_base(settings.MEDIA_SUBDIR)
    app.state.prober = FFProbe(settings.FFPROBE_BINARY, settings.FFPROBE_TIMEOUT)
    app.state.library_locks = LibraryLocks()

    # Initialize database
    init_db()
    logger.info("Database initialized: %s", settings.DATABASE_URL.split("@")[-1])  # Hide credentials

    yield

    # Shutdown
    logger.info("Shutting down %s", settings.APP_NAME)


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Media library backend: libraries, directory scanning and uploads",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MediaError)
async def media_error_handler(request: Request, exc: MediaError):
    """Translate core failures into HTTP status codes"""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.VERSION,
    }


# API v1 routes
from .api.v1 import media

app.include_router(media.router, prefix="/api/v1", tags=["media"])


class SPAStaticFiles(StaticFiles):
    """Serve index.html for unknown paths so client-side routes resolve"""

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404 or path.startswith("api/"):
                raise
            return await super().get_response("index.html", scope)


# Prebuilt frontend (optional)
ui_dist = Path(settings.UI_DIST_PATH)
if (ui_dist / "index.html").is_file():
    app.mount("/", SPAStaticFiles(directory=str(ui_dist), html=True), name="ui")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("rkmedia.main:app", host="0.0.0.0", port=3000)
