"""Per-request GraphQL context."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..resolvers.context import Services


@dataclass
class GraphQLContext:
    """What every GraphQL field resolver receives as ``info.context``.

    ``metadata`` holds the request headers; the authorization gate reads the
    bearer token from it.
    """

    services: Services
    metadata: Mapping[str, str] = field(default_factory=dict)
