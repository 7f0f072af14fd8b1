# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import SessionToken, User
from .exceptions import (
    InvalidCredentialsError,
    InvalidInviteError,
    UsernameTakenError,
    UserNotFoundError,
)
from .repositories import PasswordHasher, SessionTokenRepository, UserRepository

__all__ = [
    "InvalidCredentialsError",
    "InvalidInviteError",
    "PasswordHasher",
    "SessionToken",
    "SessionTokenRepository",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UsernameTakenError",
]
