"""
➡️ But : Configurer le canal de diagnostic (logging standard) de l'application.

À ne pas confondre avec le journal d'activité (table `logs`) : ici ce sont les
logs techniques (erreurs de stockage, progression d'upload, etc.).

setup_logging() est appelée au démarrage de l'app (main.py).
"""

import logging
import logging.config
from typing import Any, Dict

from shortlyx.core.config import settings


def get_logging_config(level: str | None = None) -> Dict[str, Any]:
    log_level = (level or settings.LOG_LEVEL).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "simple",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "shortlyx": {"level": log_level, "handlers": ["console"], "propagate": False},
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            # echo SQL seulement si on le demande explicitement
            "sqlalchemy.engine": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
        "root": {"level": log_level, "handlers": ["console"]},
    }


def setup_logging(level: str | None = None) -> None:
    logging.config.dictConfig(get_logging_config(level))
    logging.getLogger("shortlyx.core.logging").info(
        "Logging initialized for %s environment", settings.ENV
    )
