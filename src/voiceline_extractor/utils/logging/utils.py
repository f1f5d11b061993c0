# ABOUTME: structlog helpers that tag extraction log lines with run and scan context
# ABOUTME: A run decorator for the whole extraction and a scan context per category

import functools
import time
import uuid
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

import structlog

from .config import PACKAGE_LOGGER

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger; modules pass ``__name__`` so lines stay under the package logger."""
    return structlog.get_logger(name or PACKAGE_LOGGER)


def new_run_id() -> str:
    return uuid.uuid4().hex[:8]


def describe_expansions(start: int, end: int) -> str:
    """Render a half-open expansion index range the way ``--cutscene`` accepts it."""
    if end - start <= 1:
        return f"ex{start}"
    return f"ex{start}-ex{end - 1}"


def with_run_context(operation: str) -> Callable[[F], F]:
    """Bind a fresh ``run_id`` for the duration of an extraction entry point.

    Every line logged while the call runs, walker and sink lines included, carries
    ``operation`` and ``run_id`` through structlog's context variables. Start,
    elapsed time and outcome are logged; exceptions are re-raised.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)
            started = time.perf_counter()
            with structlog.contextvars.bound_contextvars(operation=operation, run_id=new_run_id()):
                logger.info("Extraction run started")
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    logger.error(
                        "Extraction run aborted",
                        elapsed_seconds=round(time.perf_counter() - started, 3),
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    raise
                logger.info("Extraction run finished", elapsed_seconds=round(time.perf_counter() - started, 3))
                return result

        return wrapper  # type: ignore[return-value]

    return decorator


class ScanContext:
    """Binds one category scan's parameters to every line logged inside it.

    The bound keys are ``category``, ``languages`` and, for cutscene scans,
    ``expansions``. A scan that ends in an exception is logged as aborted with
    its elapsed time; the exception is not suppressed.
    """

    def __init__(
        self,
        category: str,
        languages: Iterable[str],
        expansion_range: tuple[int, int] | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ):
        self.logger = logger or get_logger("voiceline_extractor.core.service")
        self.context: dict[str, str] = {"category": category, "languages": ",".join(languages)}
        if expansion_range is not None:
            self.context["expansions"] = describe_expansions(*expansion_range)
        self._tokens: dict[str, Any] = {}
        self._started = 0.0

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        self._started = time.perf_counter()
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.logger.error(
                "Category scan aborted",
                elapsed_seconds=round(time.perf_counter() - self._started, 3),
                error=str(exc_val),
                error_type=exc_type.__name__,
            )
        structlog.contextvars.reset_contextvars(**self._tokens)
