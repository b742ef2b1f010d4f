"""
Logging configuration.
Routes stdlib logging records through structlog processors: JSON lines in
production, console rendering everywhere else.
"""

import logging
from typing import Any, List, Optional

import structlog

from rental_trust.config import Settings, get_settings

HANDLER_NAME = "rental_trust"


def shared_processors() -> List[Any]:
    """Processors applied to both stdlib and structlog records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        # logger.info("...", extra={"context": "Reference"})
        structlog.stdlib.ExtraAdder(allow=("context",)),
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
    ]


def build_formatter(settings: Settings) -> structlog.stdlib.ProcessorFormatter:
    if settings.is_production:
        render_chain = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        render_chain = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors(),
        processors=render_chain,
    )


def configure_logging(settings: Optional[Settings] = None) -> logging.Handler:
    """
    Install a single root handler rendering for the current environment.

    Modules keep using logging.getLogger(__name__); structlog loggers are
    routed through the same handler. Calling it again replaces the
    previously installed handler.
    """
    settings = settings or get_settings()

    structlog.configure(
        processors=shared_processors() + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(build_formatter(settings))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if settings.debug else settings.log_level)

    logging.getLogger(__name__).debug(
        f"Logging configured for {settings.environment} at {logging.getLevelName(root.level)}"
    )
    return handler
