"""Account Service — registration and login.

Invariants:
    - Register: DuplicateUsernameError if the username exists; else the password is
      hashed and the user persisted with is_admin only when explicitly requested
    - Login: InvalidCredentialsError for unknown username AND for wrong password,
      identical in code, message, and status
    - Login with a missing field raises InputValidationError (404, legacy contract)
    - bcrypt work runs in a worker thread; the event loop is never blocked on it
"""

import asyncio
import logging

from notes_api.core.errors import (
    DuplicateUsernameError, InputValidationError, InvalidCredentialsError,
)
from notes_api.core.repository_protocols import UserLike, UserRepository
from notes_api.infrastructure.password_hasher import PasswordHasher
from notes_api.infrastructure.token_codec import TokenCodec

logger = logging.getLogger(__name__)


class AccountService:
    """User-facing account operations."""

    def __init__(
        self, users: UserRepository, hasher: PasswordHasher, tokens: TokenCodec,
    ):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    async def register(
        self, name: str, username: str, password: str, is_admin: bool = False,
    ) -> UserLike:
        if await self.users.get_by_username(username) is not None:
            raise DuplicateUsernameError()
        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        user = await self.users.create(
            name=name, username=username,
            password_hash=password_hash, is_admin=is_admin,
        )
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def login(self, username: str | None, password: str | None) -> str:
        """Return a signed token for valid credentials."""
        if username is None or password is None:
            raise InputValidationError(
                "username or password can not be empty",
                field="username" if username is None else "password",
                http_status=404,
            )
        user = await self.users.get_by_username(username)
        if user is None:
            raise InvalidCredentialsError()
        valid = await asyncio.to_thread(
            self.hasher.verify, password, user.password_hash,
        )
        if not valid:
            raise InvalidCredentialsError()
        logger.info("User logged in", extra={"user_id": user.id})
        return self.tokens.issue(user)
