"""
GraphQL API package.

Strawberry schema (queries, mutations, subscriptions) over the resolver layer.
"""

from .context import GraphQLContext
from .schema import Mutation, Query, Subscription, schema

__all__ = ["GraphQLContext", "Mutation", "Query", "Subscription", "schema"]
