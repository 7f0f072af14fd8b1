# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from devicetracker.domain.users.entities import SessionToken
from devicetracker.domain.users.exceptions import UserNotFoundError
from devicetracker.domain.users.repositories import SessionTokenRepository, UserRepository
from devicetracker.shared.logging import logger

DEFAULT_SESSION_TTL = timedelta(days=7)


def _new_token() -> str:
    return secrets.token_urlsafe(48)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    """Issues, validates and revokes opaque session tokens.

    Expiry is fixed when the session is issued; there is no sliding renewal.
    Expired records are removed lazily, the next time their token is looked up.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionTokenRepository,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        token_factory: Callable[[], str] = _new_token,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._ttl = ttl
        self._token_factory = token_factory
        self._clock = clock

    @property
    def max_age_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, user_id: int) -> SessionToken:
        if self._users.find_by_id(user_id) is None:
            raise UserNotFoundError(user_id)
        expires_at = self._clock() + self._ttl
        session = self._sessions.add(user_id, self._token_factory(), expires_at)
        logger.info(
            f"session.issue: ok (user_id={user_id}, exp={expires_at.isoformat()}, "
            f"tok={session.token[:6]}…)"
        )
        return session

    def validate(self, token: str | None) -> int | None:
        if not token:
            return None
        session = self._sessions.find_by_token(token)
        if session is None:
            logger.debug("session.validate: unknown token")
            return None
        if session.is_expired(self._clock()):
            self._sessions.delete(token)
            logger.info(f"session.validate: expired, removed (user_id={session.user_id})")
            return None
        return session.user_id

    def revoke(self, token: str | None) -> None:
        if not token:
            return
        removed = self._sessions.delete(token)
        logger.info(f"session.revoke: {'ok' if removed else 'noop'}")
