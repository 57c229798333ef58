"""FastAPI dependency injection for shared application state."""

import threading

from fastapi import HTTPException

from qrscreen.core.config import Settings
from qrscreen.protocol.session import ScreenSession


class AppState:
    """Holds shared application state instances.

    Created during app startup and accessed via FastAPI dependencies.
    The lock serialises transactions: sync endpoints run in a threadpool
    and the session itself does not lock.
    """

    def __init__(self) -> None:
        self.settings: Settings | None = None
        self.session: ScreenSession | None = None
        self.lock = threading.Lock()


# Global app state singleton
app_state = AppState()


def get_session() -> ScreenSession:
    """Get the open screen session, or fail with 503."""
    session = app_state.session
    if session is None or not session.is_open:
        raise HTTPException(status_code=503, detail="Screen not connected")
    return session


def get_settings() -> Settings:
    """Get the settings instance."""
    assert app_state.settings is not None, "App not initialized"
    return app_state.settings
