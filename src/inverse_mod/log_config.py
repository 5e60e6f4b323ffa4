import logging

import structlog


def configure_logging(verbose: bool = False, json: bool = False) -> None:
    """Install the structlog pipeline used by the CLI and the API server."""
    renderer = structlog.processors.JSONRenderer(indent=2) if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.WARNING),
        cache_logger_on_first_use=False,
    )


def ensure_logging() -> None:
    """Install the default pipeline unless something configured structlog already.

    Without it structlog prints every level, debug search events included.
    """
    if not structlog.is_configured():
        configure_logging()
