"""Application configuration using pydantic-settings."""

import logging
import sys

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from qrscreen.protocol.constants import BAUD_RATE, DEFAULT_READ_TIMEOUT_MS, DEFAULT_WRITE_TIMEOUT_MS


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    prefixed with QRSCREEN_ (e.g., QRSCREEN_SERIAL_PORT).
    """

    serial_port: str = "/dev/ttyACM0"
    serial_baud: int = BAUD_RATE
    read_timeout_ms: int = Field(DEFAULT_READ_TIMEOUT_MS, ge=0)
    write_timeout_ms: int = Field(DEFAULT_WRITE_TIMEOUT_MS, ge=0)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="QRSCREEN_")


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
