import logging

from truckload.core.config import settings


def _category_enabled(category: str | None) -> bool:
    if not settings.FLOW_LOGS_ENABLED:
        return False
    if category == "ingestion":
        return settings.FLOW_LOGS_INGESTION_ENABLED
    if category == "export":
        return settings.FLOW_LOGS_EXPORT_ENABLED
    return True


def flow_info(
    logger: logging.Logger,
    msg: str,
    *args,
    category: str | None = None,
    **kwargs,
) -> None:
    if _category_enabled(category):
        logger.info(msg, *args, **kwargs)


def configure_logging() -> None:
    """Apply LOG_LEVEL to the package logger; handlers are left to the runner."""
    level = logging.getLevelName(settings.LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.INFO
    logging.getLogger("truckload").setLevel(level)
