"""Span helpers for repository calls."""

import time
from collections.abc import Iterator
from contextlib import contextmanager

import logfire


@contextmanager
def trace_repository_operation(
    repository: str, operation: str, table: str | None = None
) -> Iterator[logfire.LogfireSpan]:
    """Open a ``db.<Repository>.<operation>`` span around one repository call.

    The span is yielded so callers can attach result attributes such as
    ``db.row_count``. Failures are tagged with the exception type and
    re-raised unchanged.
    """
    started = time.perf_counter()
    with logfire.span(
        "db.{repository}.{operation}",
        repository=repository,
        operation=operation,
        db_table=table or repository.lower(),
    ) as span:
        try:
            yield span
        except Exception as e:
            span.set_attribute("db.success", False)
            span.set_attribute("db.error_type", type(e).__name__)
            raise
        else:
            span.set_attribute("db.success", True)
        finally:
            span.set_attribute("db.duration_ms", (time.perf_counter() - started) * 1000)
