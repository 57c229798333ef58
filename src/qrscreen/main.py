"""Main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from qrscreen import __version__
from qrscreen.api.dependencies import app_state
from qrscreen.api.routes import router as api_router
from qrscreen.core.config import Settings, setup_logging
from qrscreen.core.exceptions import TransportOpenError
from qrscreen.core.models import HealthResponse
from qrscreen.protocol.session import ScreenSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: open the screen on startup, release it on shutdown."""
    settings = app_state.settings or Settings()
    app_state.settings = settings

    setup_logging(settings.log_level)
    logger.info("Starting QR-screen gateway v%s", __version__)

    try:
        app_state.session = ScreenSession.open(
            settings.serial_port,
            read_timeout_ms=settings.read_timeout_ms,
            write_timeout_ms=settings.write_timeout_ms,
            baudrate=settings.serial_baud,
        )
        logger.info("Connected to %s", settings.serial_port)
    except TransportOpenError as e:
        logger.warning("Screen unavailable, API will answer 503: %s", e)
        app_state.session = None

    yield

    # Shutdown
    logger.info("Shutting down...")
    if app_state.session is not None:
        with app_state.lock:
            app_state.session.close()
        app_state.session = None


app = FastAPI(
    title="QR-screen Gateway",
    description="Local REST API for the R-Call QR-screen",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "QR-screen Gateway",
        "version": __version__,
        "status": "running",
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    session = app_state.session

    if session is None:
        return HealthResponse(status="unhealthy", screen_connected=False)

    connected = session.is_open
    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        screen_connected=connected,
        port=session.port,
    )


def main():
    """Run the application (for CLI entry point)."""
    import uvicorn

    settings = Settings()
    setup_logging(settings.log_level)
    app_state.settings = settings

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
