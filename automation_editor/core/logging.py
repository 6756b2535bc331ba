"""
Logging Configuration
"""
import logging
import sys
from automation_editor.core.config import get_settings


def setup_logging():
    """Configure application-wide logging"""
    settings = get_settings()

    handlers = [logging.StreamHandler(sys.stdout)]

    if settings.LOG_TO_FILE:
        settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.LOG_DIR / "automation_editor.log"))

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
        handlers=handlers
    )

    # Set level for external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get logger for a specific module"""
    return logging.getLogger(name)
