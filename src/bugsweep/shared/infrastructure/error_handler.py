"""Centralized async error handling decorator."""

import functools
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


def _map_exception(
    error: Exception, error_map: dict[type[Exception], type[Exception]] | None
) -> Exception:
    if not error_map:
        return error
    for source_type, target_type in error_map.items():
        if isinstance(error, source_type) and not isinstance(error, target_type):
            return target_type(str(error))
    return error


def async_error_handler(
    fallback_value: Any = None,
    log_level: str = "error",
    error_map: dict[type[Exception], type[Exception]] | None = None,
    context_keys: list[str] | None = None,
    reraise: bool = True,
):
    """
    Standardized async error handling decorator.

    Provides consistent error logging, transformation and recovery for
    task actions that talk to the filesystem or external processes.

    Args:
        fallback_value: Return this on error. If None and reraise=True, re-raises.
            Can be a callable that returns the fallback value.
        log_level: structlog level for error logging ("error", "warning", "info", "debug")
        error_map: Transform exceptions {SourceType: TargetType}; subclasses of
            SourceType are mapped as well
        context_keys: Extract these from kwargs for log context
        reraise: If True and no fallback_value, re-raise the exception

    Example:
        ```python
        @async_error_handler(
            error_map={OSError: ReportError},
            context_keys=["xml_report"],
        )
        async def read_report(xml_report):
            ...
        ```
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except Exception as e:
                mapped = _map_exception(e, error_map)

                log_ctx = {}
                if context_keys:
                    for key in context_keys:
                        if key in kwargs:
                            log_ctx[key] = str(kwargs[key])

                log_method = getattr(logger, log_level, logger.error)
                log_method(
                    f"{fn.__qualname__}_failed",
                    error=str(mapped),
                    error_type=type(mapped).__name__,
                    **log_ctx,
                )

                if fallback_value is not None:
                    if callable(fallback_value):
                        return fallback_value()
                    return fallback_value
                if reraise:
                    if mapped is e:
                        raise
                    raise mapped from e
                return None

        return wrapper

    return decorator
