import sys
from loguru import logger
from .config import settings


def setup_logging(level: str | None = None, json_logs: bool | None = None):
    """
    Configure the process-wide loguru logger.

    Replaces loguru's default handler with a single stderr sink. Structured
    context passed as keyword arguments (logger.info("...", vendor=...)) is
    kept in record["extra"] and rendered in JSON mode.

    Args:
        level: Minimum level, defaults to LOG_LEVEL
        json_logs: Emit one JSON object per line, defaults to LOG_JSON

    Returns:
        The configured loguru logger
    """
    level = (level or settings.log_level).upper()
    json_logs = settings.log_json if json_logs is None else json_logs

    logger.remove()
    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
                   "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level> | {extra}",
        )
    return logger
