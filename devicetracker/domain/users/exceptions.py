# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from devicetracker.shared.errors.base import DomainError, NotFoundError


class UsernameTakenError(DomainError):
    default_code = "username_taken"
    default_status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    default_code = "invalid_credentials"
    default_status = HTTPStatus.UNAUTHORIZED


class InvalidInviteError(DomainError):
    default_code = "invalid_invite"
    default_status = HTTPStatus.FORBIDDEN


class UserNotFoundError(NotFoundError):
    default_code = "user_not_found"

    def __init__(self, user_id: int) -> None:
        super().__init__({"user_id": user_id})
