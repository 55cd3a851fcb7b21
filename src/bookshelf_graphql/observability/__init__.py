"""
Tracing for resolvers and repository calls, backed by Logfire.

Spans are always created; whether they leave the process depends on
``initialize_observability``. Without a ``LOGFIRE_TOKEN`` they stay local.
"""

import logging

import logfire

from .config import ObservabilityConfig
from .context import trace_repository_operation
from .decorators import trace_resolver

logger = logging.getLogger(__name__)


def initialize_observability(
    config: ObservabilityConfig | None = None, *, service_version: str | None = None
) -> ObservabilityConfig:
    """Configure Logfire for the running server. Call once, before serving."""
    active = config or ObservabilityConfig()

    if active.enabled:
        logfire.configure(
            token=active.token or None,
            service_name=active.project_name,
            service_version=service_version,
            environment=active.environment,
            send_to_logfire=active.send_to_logfire,
            console=None if active.console_output else False,
        )
        logger.info(
            "Tracing on (environment=%s, export=%s)", active.environment, active.send_to_logfire
        )
    else:
        logger.info("Tracing export disabled by LOGFIRE_ENABLED")
    return active


__all__ = [
    "ObservabilityConfig",
    "initialize_observability",
    "trace_repository_operation",
    "trace_resolver",
]
