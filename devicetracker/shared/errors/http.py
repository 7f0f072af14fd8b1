# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Response, jsonify
from werkzeug.exceptions import HTTPException

from .base import AppError


def error_response(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def http_exception_response(exc: HTTPException) -> tuple[Response, int]:
    """Render werkzeug's 404/405/... as ``{"error": "<snake_name>"}``."""

    name = (exc.name or "error").lower().replace(" ", "_")
    return jsonify({"error": name}), exc.code or HTTPStatus.INTERNAL_SERVER_ERROR
