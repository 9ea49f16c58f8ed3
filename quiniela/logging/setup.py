import sys
import logging
from typing import Any

from loguru import logger

from quiniela.config.settings import settings

# Raw OCR and HTML blobs can be tens of kilobytes; keep log lines readable.
MAX_EXTRA_VALUE_LENGTH = 200


def long_value_filter(record: dict[str, Any]) -> bool:
    """Filter function that truncates oversized values bound into log records."""

    def truncate_value(value: Any) -> Any:
        if isinstance(value, str) and len(value) > MAX_EXTRA_VALUE_LENGTH:
            return value[:MAX_EXTRA_VALUE_LENGTH] + f"... (+{len(value) - MAX_EXTRA_VALUE_LENGTH} chars)"
        elif isinstance(value, dict):
            return {k: truncate_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [truncate_value(item) for item in value]
        return value

    if "extra" in record and isinstance(record["extra"], dict):
        for key, value in record["extra"].items():
            record["extra"][key] = truncate_value(value)

    return True  # Keep the record after truncation


def setup_logging() -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=True,
        filter=long_value_filter,
    )

    logger.info(f"Logging initialized with level: {settings.log_level}")

    # Intercept standard logging messages (httpx logs through stdlib logging)
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            # Get corresponding Loguru level if it exists
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame, depth = logging.currentframe(), 2
            while frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.info("Standard logging intercepted.")
