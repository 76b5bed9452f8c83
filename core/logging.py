import logging
import sys

from core.config import settings

# loggers whose level follows DOCUMENTS_LOG_LEVEL instead of LOG_LEVEL
ENGINE_LOGGERS = ("services.documents", "domain")


def configure_logging(level: str | None = None, engine_level: str | None = None) -> None:
    """
    Root handler for the API process, plus a separate level for the review
    engine so its per-request traces can be switched on alone.
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in ENGINE_LOGGERS:
        logging.getLogger(name).setLevel((engine_level or settings.DOCUMENTS_LOG_LEVEL).upper())


logger = logging.getLogger("housing_docs")
