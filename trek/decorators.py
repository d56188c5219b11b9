"""Decorators for performance monitoring and debugging.

These wrap the pipeline entry points with timing and call tracing without
cluttering the geometry code itself.

@timed
------
Measures execution time and logs it at DEBUG level. Functions taking longer
than five seconds additionally produce a warning.

Example:
    >>> @timed
    ... def layout(count):
    ...     ...
    >>> layout(200)
    DEBUG: layout took 0.04s

@log_calls
----------
Logs calls with their arguments and return values, plus any exception the
call raises. Argument formatting is skipped entirely unless DEBUG logging is
enabled, so decorating hot paths costs a level check when debugging is off.

Example:
    >>> @log_calls
    ... def moon_progress_percent(distance_miles):
    ...     return distance_miles / 2388.55
    >>> moon_progress_percent(26.2)
    DEBUG: Calling moon_progress_percent(26.2)
    DEBUG: moon_progress_percent returned 0.0109...

When stacking, put @timed outermost so it measures the whole call.
"""

import functools
import logging
import time
from typing import Any, Callable, TypeVar

from .logger import logger

__all__ = [
    "timed",
    "log_calls",
]

F = TypeVar("F", bound=Callable[..., Any])

SLOW_CALL_SECONDS = 5.0


def timed(func: F) -> F:
    """Decorator to measure and log function execution time.

    Args:
        func: Function to time

    Returns:
        Wrapped function that logs execution time
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start_time

        logger.debug(f"{func.__name__} took {elapsed:.2f}s")

        if elapsed > SLOW_CALL_SECONDS:
            logger.warning(
                f"{func.__name__} took {elapsed:.2f}s (consider optimization)"
            )

        return result

    return wrapper


def log_calls(func: F) -> F:
    """Decorator to log function calls with arguments.

    Args:
        func: Function to log

    Returns:
        Wrapped function that logs calls
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not logger.isEnabledFor(logging.DEBUG):
            return func(*args, **kwargs)

        args_repr = [repr(a) for a in args]
        kwargs_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
        signature = ", ".join(args_repr + kwargs_repr)

        logger.debug(f"Calling {func.__name__}({signature})")

        try:
            result = func(*args, **kwargs)
            logger.debug(f"{func.__name__} returned {result!r}")
            return result
        except Exception as e:
            logger.error(f"{func.__name__} raised {type(e).__name__}: {e}")
            raise

    return wrapper
