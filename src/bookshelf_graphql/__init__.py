"""
Bookshelf GraphQL Service Package.

A GraphQL API over a small book catalog with password-based accounts, bearer
token authorization and live "book added" subscriptions.

Key Components:
- config: Configuration management with pydantic-settings
- models: Pydantic models for records and operation inputs
- database: SQLAlchemy schema, sessions and repositories
- auth: password hashing, token service and authorization gate
- notifications: in-memory publish/subscribe bus
- resolvers: one async function per API operation
- api: Strawberry GraphQL schema
- server: ASGI application and entry point
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
