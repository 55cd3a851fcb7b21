"""
User repository - the credential store.

Stores accounts with their password hash. Username uniqueness is enforced by
the ``uq_users_username`` constraint at insert time rather than by a
check-then-insert, so two concurrent registrations of the same name cannot
both succeed.
"""

from sqlalchemy import select

from ..database.schema import User as UserDB
from ..models.user import User as UserModel
from ..models.user import UserWithHash
from ..observability import trace_repository_operation
from .repository import BaseRepository
from .session import safe_query


class UserRepository(BaseRepository[UserDB, UserModel]):
    """Repository for account data access."""

    @property
    def model_class(self):
        return UserDB

    @property
    def response_schema(self):
        return UserModel

    def create(self, username: str, password_hash: str) -> UserModel:
        """
        Create an account.

        Args:
            username: Unique, case-sensitive account name
            password_hash: Output of the password hasher, never the plaintext

        Raises:
            DuplicateError: If the username is already taken
            RepositoryException: On other database errors
        """
        return self._create(username=username, password_hash=password_hash)

    def get_by_username(self, username: str) -> UserWithHash | None:
        """
        Look up an account, including its hash, by exact username.

        Returns:
            The account or None if no account has that username
        """
        query = select(UserDB).where(UserDB.username == username)
        with trace_repository_operation("User", "get_by_username", UserDB.__tablename__):
            db_obj = safe_query(
                self.session,
                lambda s: s.execute(query).scalar_one_or_none(),
                "Failed to get User by username",
            )

        if db_obj is None:
            return None
        return UserWithHash.model_validate(db_obj, from_attributes=True)
