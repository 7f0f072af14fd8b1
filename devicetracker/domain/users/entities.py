# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:
    """A registered account. ``password_hash`` is never the plaintext."""

    id: int
    username: str
    password_hash: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class SessionToken:
    """Server-side session issued at login; ``expires_at`` is aware UTC."""

    user_id: int
    token: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        # a token is dead at its expiry instant, not one tick later
        return self.expires_at <= now
