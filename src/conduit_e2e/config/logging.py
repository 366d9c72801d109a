"""structlog setup for test runs.

Events are JSON lines unless debugging, in which case they are rendered for
the console. Inside `bound_test` every event carries the id of the running
test, so interleaved output from retries and fixtures stays attributable.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from conduit_e2e.config.settings import Settings, get_settings

# Per-request loggers of the HTTP stack, kept at WARNING outside debug runs
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and stdlib logging for the test run."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level)

    renderer: structlog.types.Processor = (
        structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(name)s %(levelname)s %(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    third_party_level = log_level if settings.debug else max(log_level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)


@contextmanager
def bound_test(nodeid: str) -> Iterator[None]:
    """Tag every event logged inside the block with the test's node id."""
    with structlog.contextvars.bound_contextvars(test=nodeid):
        yield
