# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import SessionToken, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def add(self, username: str, password_hash: str) -> User:
        """Insert a user; raises ``UsernameTakenError`` when the name exists."""
        ...


class SessionTokenRepository(Protocol):
    def add(self, user_id: int, token: str, expires_at: datetime) -> SessionToken: ...

    def find_by_token(self, token: str) -> SessionToken | None: ...

    def delete(self, token: str) -> bool:
        """Remove the session; returns False when no row matched."""
        ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...
