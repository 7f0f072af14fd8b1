# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from devicetracker.shared.errors import AppError, error_response, http_exception_response
from devicetracker.shared.logging import logger


def _where() -> str:
    return f"{request.method} {request.path}"


def configure_error_handling(app: Flask, *, debug_mode: bool = False) -> None:
    """Every error leaves the app as JSON with an ``error`` code."""

    @app.errorhandler(AppError)
    def _app_error(exc: AppError):
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"{exc.code} on {_where()} context={exc.context}")
        else:
            logger.info(f"{exc.code} on {_where()}")
        return error_response(exc)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return http_exception_response(exc)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        user_id = getattr(g, "user_id", None)
        if debug_mode:
            logger.exception(f"Unhandled {type(exc).__name__} on {_where()} (user={user_id})")
        else:
            logger.error(f"Unhandled {type(exc).__name__} on {_where()} (user={user_id})")
        return jsonify({"error": "internal_error"}), HTTPStatus.INTERNAL_SERVER_ERROR
