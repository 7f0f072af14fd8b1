# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class _FixedError(AppError):
    """AppError whose code and status come from class-level defaults."""

    default_code: ClassVar[str]
    default_status: ClassVar[HTTPStatus]

    def __init__(self, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(self.default_code, self.default_status, context)


class DomainError(_FixedError):
    default_code = "domain_error"
    default_status = HTTPStatus.BAD_REQUEST


class InfrastructureError(_FixedError):
    default_code = "infrastructure_error"
    default_status = HTTPStatus.INTERNAL_SERVER_ERROR


class ValidationError(_FixedError):
    default_code = "validation_error"
    default_status = HTTPStatus.UNPROCESSABLE_ENTITY


class MissingFieldError(DomainError):
    default_code = "missing_field"

    def __init__(self, field: str) -> None:
        super().__init__({"field": field})
        self.field = field


class NotFoundError(DomainError):
    default_code = "not_found"
    default_status = HTTPStatus.NOT_FOUND


class StoreUnavailableError(InfrastructureError):
    default_code = "store_unavailable"
    default_status = HTTPStatus.SERVICE_UNAVAILABLE

    def __init__(self, operation: str | None = None) -> None:
        super().__init__({"operation": operation} if operation else None)


def require_fields(**values: object) -> None:
    """Raise MissingFieldError for the first value that is None or blank."""

    for name, value in values.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingFieldError(name)
