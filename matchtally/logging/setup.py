import sys
import logging
from typing import Optional

from loguru import logger

from matchtally.config.settings import normalize_log_level, settings

ENGINE_SOURCE = "matchtally"


class InterceptHandler(logging.Handler):
    """Routes standard logging records into loguru, tagged with their logger name."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(source=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def setup_logging(level: Optional[str] = None) -> int:
    """Configures Loguru for the engine and returns the new sink id.

    Every record carries `extra["source"]`: "matchtally" for engine messages,
    the stdlib logger name for intercepted ones.

    Args:
        level: Log level name. Defaults to the configured log_level; unknown
               names fall back to INFO.
    """
    log_level = normalize_log_level(level or settings.log_level) or "INFO"

    logger.remove()  # Remove default handler
    logger.configure(extra={"source": ENGINE_SOURCE})

    sink_id = logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<magenta>{extra[source]}</magenta> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=True,
    )
    logger.info(f"Engine logging initialized with level: {log_level}")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    return sink_id
