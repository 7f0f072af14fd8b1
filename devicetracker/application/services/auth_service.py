# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hmac

from devicetracker.domain.users.entities import SessionToken, User
from devicetracker.domain.users.exceptions import (
    InvalidCredentialsError,
    InvalidInviteError,
    UsernameTakenError,
)
from devicetracker.domain.users.repositories import PasswordHasher, UserRepository
from devicetracker.shared.errors import require_fields
from devicetracker.shared.logging import logger

from .session_manager import SessionManager


class AuthService:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionManager,
        password_hasher: PasswordHasher,
        invite_code: str | None,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._invite_code = invite_code

    def _invite_matches(self, invite_code: str) -> bool:
        if not self._invite_code:
            return False
        return hmac.compare_digest(invite_code.encode(), self._invite_code.encode())

    def register(self, username: str, password: str, invite_code: str) -> SessionToken:
        require_fields(username=username, password=password, invite_code=invite_code)

        if not self._invite_matches(invite_code):
            logger.info(f"auth.register: invalid invite (username={username})")
            raise InvalidInviteError()

        if self._users.find_by_username(username) is not None:
            logger.info(f"auth.register: username taken (username={username})")
            raise UsernameTakenError()

        hashed = self._password_hasher.hash(password)
        user = self._users.add(username, hashed)
        session = self._sessions.issue(user.id)
        logger.info(f"auth.register: ok (user_id={user.id})")
        return session

    def login(self, username: str, password: str) -> SessionToken:
        require_fields(username=username, password=password)

        user = self._users.find_by_username(username)
        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash
        )
        if not password_valid:
            logger.info(f"auth.login: rejected (username={username})")
            raise InvalidCredentialsError()

        session = self._sessions.issue(user.id)
        logger.info(f"auth.login: ok (user_id={user.id})")
        return session

    def logout(self, token: str | None) -> None:
        self._sessions.revoke(token)

    def username_exists(self, username: str) -> bool:
        require_fields(username=username)
        return self._users.find_by_username(username) is not None

    def current_user(self, user_id: int) -> User | None:
        return self._users.find_by_id(user_id)
