# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devicetracker.domain.users.entities import SessionToken as DomainSessionToken
from devicetracker.domain.users.entities import User as DomainUser
from devicetracker.domain.users.exceptions import UsernameTakenError
from devicetracker.domain.users.repositories import SessionTokenRepository, UserRepository
from devicetracker.infrastructure.db.models import SessionToken, User, as_utc
from devicetracker.infrastructure.unit_of_work import unit_of_work_scope
from devicetracker.shared.logging import logger


def _to_domain_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
    )


def _to_domain_token(row: SessionToken) -> DomainSessionToken:
    return DomainSessionToken(
        user_id=row.user_id,
        token=row.token,
        expires_at=as_utc(row.expires_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory, "users.find_by_username") as session:
            row = session.scalars(select(User).where(User.username == username)).first()
            return _to_domain_user(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory, "users.find_by_id") as session:
            row = session.get(User, user_id)
            return _to_domain_user(row) if row else None

    def add(self, username: str, password_hash: str) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory, "users.add") as session:
                row = User(username=username, password_hash=password_hash)
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain_user(row)
        except IntegrityError as exc:
            logger.info("users.add: unique constraint hit, username already registered")
            raise UsernameTakenError() from exc


class SqlAlchemySessionTokenRepository(SessionTokenRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, user_id: int, token: str, expires_at: datetime) -> DomainSessionToken:
        with unit_of_work_scope(self._session_factory, "sessions.add") as session:
            row = SessionToken(user_id=user_id, token=token, expires_at=expires_at)
            session.add(row)
            session.flush()
            return _to_domain_token(row)

    def find_by_token(self, token: str) -> DomainSessionToken | None:
        with unit_of_work_scope(self._session_factory, "sessions.find_by_token") as session:
            row = session.scalars(select(SessionToken).where(SessionToken.token == token)).first()
            return _to_domain_token(row) if row else None

    def delete(self, token: str) -> bool:
        with unit_of_work_scope(self._session_factory, "sessions.delete") as session:
            result = session.execute(delete(SessionToken).where(SessionToken.token == token))
            return bool(result.rowcount)
