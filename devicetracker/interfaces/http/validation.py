# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from flask import request
from pydantic import BaseModel, ValidationError

from devicetracker.shared.errors.validation import raise_validation_error

DTO = TypeVar("DTO", bound=BaseModel)


def _validate(dto_cls: type[DTO], data: Mapping[str, Any]) -> DTO:
    try:
        return dto_cls.model_validate(data)
    except ValidationError as exc:
        raise_validation_error(exc)


def parse_body(dto_cls: type[DTO]) -> DTO:
    payload = request.get_json(silent=True)
    return _validate(dto_cls, payload if isinstance(payload, dict) else {})


def parse_query(dto_cls: type[DTO]) -> DTO:
    # blank query values mean "no filter"
    args = {key: value for key, value in request.args.items() if value.strip()}
    return _validate(dto_cls, args)
