"""
Account resolvers - registration and login.

Neither operation requires a token; both return one. Login failures are
deliberately undifferentiated: an unknown username and a wrong password raise
the same ``InvalidCredentials`` with the same message, and both paths run one
bcrypt comparison so they also take the same time.
"""

import logging

from ..database.repository import DuplicateError
from ..database.user_repository import UserRepository
from ..errors import DuplicateUsername, InvalidCredentials
from ..models.user import AuthPayload, Credentials
from ..observability import trace_resolver
from .context import Services
from .inputs import validate_input

logger = logging.getLogger(__name__)


@trace_resolver("register", mutation=True)
async def register(services: Services, *, username: str, password: str) -> AuthPayload:
    """
    Create an account and log it in.

    Raises:
        InvalidInput: If username or password is empty, or the password is too long
        DuplicateUsername: If the username is taken; nothing is written
    """
    credentials = validate_input(Credentials, username=username, password=password)
    password_hash = await services.hasher.hash_async(credentials.password)

    try:
        with services.db.session_scope() as session:
            user = UserRepository(session).create(credentials.username, password_hash)
    except DuplicateError as e:
        logger.info("Registration rejected: username already taken")
        raise DuplicateUsername() from e

    logger.info("Registered user %d", user.id)
    token = services.tokens.issue_for(user)
    return AuthPayload(id=user.id, username=user.username, token=token)


@trace_resolver("login", mutation=True)
async def login(services: Services, *, username: str, password: str) -> AuthPayload:
    """
    Exchange a username and password for a fresh token.

    Raises:
        InvalidCredentials: If the account does not exist or the password is wrong
    """
    with services.db.session_scope() as session:
        account = UserRepository(session).get_by_username(username)

    if account is None:
        await services.hasher.burn_async(password)
        logger.info("Login failed")
        raise InvalidCredentials()

    if not await services.hasher.verify_async(password, account.password_hash):
        logger.info("Login failed")
        raise InvalidCredentials()

    logger.info("User %d logged in", account.id)
    token = services.tokens.issue_for(account)
    return AuthPayload(id=account.id, username=account.username, token=token)
