"""Decorators for tracing resolver execution."""

import functools
from collections.abc import Callable
from datetime import datetime

import logfire

# Never recorded as span attributes
_SENSITIVE_ARGS = frozenset({"password", "token", "metadata"})


def trace_resolver(operation: str, *, mutation: bool = False):
    """Wrap an async resolver in a Logfire span.

    Successful and failed calls both record their duration; failures also
    record the error code of domain errors.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            with logfire.span(
                f"resolver.{operation}",
                resolver=operation,
                resolver_kind="mutation" if mutation else "query",
            ) as span:
                start_time = datetime.now()

                for key, value in kwargs.items():
                    if key not in _SENSITIVE_ARGS and isinstance(value, (str, int, bool)):
                        span.set_attribute(f"input.{key}", value)

                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_attribute("resolver.success", False)
                    span.set_attribute("resolver.error", type(e).__name__)
                    span.set_attribute("resolver.error_code", getattr(e, "code", "INTERNAL_ERROR"))
                    raise
                finally:
                    span.set_attribute(
                        "resolver.duration_ms",
                        (datetime.now() - start_time).total_seconds() * 1000,
                    )

                span.set_attribute("resolver.success", True)
                return result

        return wrapper

    return decorator
