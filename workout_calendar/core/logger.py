"""Logger configuration for the workout calendar.

Console output always goes to stderr. A file sink is added when LOG_FILE is
set (or a path is passed explicitly); it rotates by size and can write JSON
lines for machine consumption.
"""

import sys
from pathlib import Path

from loguru import logger

from workout_calendar.config.settings import Settings, settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str | None = None,
    log_file: str | None = None,
    rotation: str = "5 MB",
    retention: str = "14 days",
    serialize: bool | None = None,
    config: Settings | None = None,
) -> None:
    """Configure loguru sinks.

    Args:
        level: Logging level; defaults to LOG_LEVEL
        log_file: Optional log file path; defaults to LOG_FILE (no file when unset)
        rotation: Log rotation size (e.g., "5 MB", "1 day")
        retention: Log retention period (e.g., "14 days")
        serialize: Write the file sink as JSON lines; defaults to LOG_JSON
        config: Settings to read defaults from
    """
    config = config or settings
    level = (level or config.log_level).upper()
    log_file = log_file if log_file is not None else config.log_file
    serialize = config.log_json if serialize is None else serialize

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=serialize,
            backtrace=True,
            diagnose=False,
        )

    logger.info(f"Logger initialized with level={level}" + (f", file={log_file}" if log_file else ""))


# Initialize logger on import
setup_logger()
