"""Bookshelf GraphQL Server - ASGI application and entry point

Serves the schema over HTTP (queries and mutations) and WebSockets
(subscriptions, ``graphql-transport-ws`` and legacy ``graphql-ws``
protocols) using Strawberry's ASGI integration, run by uvicorn.

The request headers become the resolver metadata, so clients authenticate
mutations with ``Authorization: Bearer <token>`` (the ``Bearer`` prefix is
optional).
"""

import logging
import sys
from typing import Any

import uvicorn
from strawberry.asgi import GraphQL
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from .api import GraphQLContext, schema
from .config import ServerConfig, get_config
from .observability import initialize_observability
from .resolvers import Services, create_services

logger = logging.getLogger(__name__)


class BookshelfGraphQL(GraphQL):
    """Strawberry ASGI app that injects the service container into every request."""

    def __init__(self, services: Services, **kwargs: Any):
        super().__init__(schema, **kwargs)
        self.services = services

    async def get_context(self, request: Any, response: Any = None) -> GraphQLContext:
        return GraphQLContext(services=self.services, metadata=request.headers)


def configure_logging(config: ServerConfig) -> None:
    """Send logs to stderr at the configured level."""
    logging.basicConfig(
        level=logging.DEBUG if config.debug else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def create_app(config: ServerConfig | None = None, services: Services | None = None) -> BookshelfGraphQL:
    """
    Application factory.

    Args:
        config: Settings; defaults to the global configuration
        services: Prebuilt services (tests); built from ``config`` otherwise

    Returns:
        The ASGI application
    """
    config = config or get_config()
    services = services or create_services(config)
    services.db.init_database()

    if not services.db.verify_connection():
        raise RuntimeError(f"Cannot connect to database at {services.db.database_url}")

    return BookshelfGraphQL(
        services,
        graphql_ide="graphiql" if config.graphql_ide else None,
        subscription_protocols=[GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL],
    )


def main() -> None:
    """Entry point for the ``bookshelf-graphql`` console script."""
    config = get_config()
    configure_logging(config)
    initialize_observability(service_version=config.server_version)

    logger.info("=" * 60)
    logger.info("Bookshelf GraphQL Server")
    logger.info("Version: %s", config.server_version)
    logger.info("Listening on: http://%s:%d/graphql", config.http_host, config.http_port)
    logger.info("Debug Mode: %s", config.debug)
    logger.info("=" * 60)

    try:
        app = create_app(config)
        uvicorn.run(
            app,
            host=config.http_host,
            port=config.http_port,
            log_level="debug" if config.debug else config.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Failed to start server")
        sys.exit(1)


if __name__ == "__main__":
    main()
