"""Settings for the SKU codec.

Values come from the environment (or a ``.env`` file) through
python-decouple.  Every service/allocator accepts constructor overrides,
so these are only defaults.
"""

import logging.config

import structlog
from decouple import config

# ---------------------------------------------------------------------------
# SKU generation
# ---------------------------------------------------------------------------
SKU_SEQUENCE_MAX_ATTEMPTS = config("SKU_SEQUENCE_MAX_ATTEMPTS", default=1000, cast=int)

SKU_MAX_REGENERATIONS = config("SKU_MAX_REGENERATIONS", default=5, cast=int)

SKU_CURRENCY_SYMBOL = config("SKU_CURRENCY_SYMBOL", default="")

# ---------------------------------------------------------------------------
# Structured Logging (structlog + stdlib logging)
# ---------------------------------------------------------------------------
LOG_LEVEL = config("LOG_LEVEL", default="INFO")

LOG_JSON = config("LOG_JSON", default=True, cast=bool)

# Shared processors used by both structlog and stdlib logging
_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def build_logging_config(level=None, json=None):
    """Return the ``dictConfig`` payload for the given level/renderer."""
    level = (level or LOG_LEVEL).upper()
    json = LOG_JSON if json is None else json
    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    renderer,
                ],
                "foreign_pre_chain": _shared_processors,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }


def configure_logging(level=None, json=None):
    """Route structlog through stdlib logging with a JSON or console renderer.

    Applications call this once at start-up; importing the library never
    touches the global logging configuration.
    """
    structlog.configure(
        processors=[
            *_shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.config.dictConfig(build_logging_config(level=level, json=json))
