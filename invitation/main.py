"""Wedding Invitation Web Application."""
import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from invitation.core.config import config_file_loaded, settings
from invitation.core.dependencies import get_persistence
from invitation.core.scheduler import ReconnectSupervisor
from invitation.routes import images, pages, rsvp
from invitation.sheets.persistence import RSVPPersistence

# Configure logging
settings.log_dir.mkdir(parents=True, exist_ok=True)
log_file = settings.log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    # Startup
    logger.info("Starting Wedding Invitation application")
    if config_file_loaded():
        logger.info("Configuration loaded from set.json")
    persistence = app.dependency_overrides.get(get_persistence, get_persistence)()
    supervisor = ReconnectSupervisor(
        persistence,
        base_interval=settings.reconnect_interval_seconds,
        max_interval=settings.reconnect_max_interval_seconds,
    )
    supervisor.start()
    yield
    # Shutdown
    supervisor.shutdown()
    logger.info("Wedding Invitation application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Wedding invitation page with RSVP responses recorded in Google Sheets",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 in the API's error shape."""
    logger.info(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.get("/api/health")
async def health(persistence: RSVPPersistence = Depends(get_persistence)):
    """Health check endpoint."""
    connection = persistence.state.snapshot()
    return {
        "status": "OK",
        "sheetsInitialized": connection["reachable"],
        "configLoaded": config_file_loaded(),
        "timestamp": datetime.now(UTC).isoformat(),
        "connection": {
            "attempts": connection["attempts"],
            "lastError": connection["lastError"],
            "lastChanged": connection["lastChanged"],
            "transitions": connection["transitions"],
        },
    }


# Include routers; the page fallback must come last
app.include_router(rsvp.router)
app.include_router(images.router)
app.include_router(pages.router)


def run():
    """Serve the application with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port)
