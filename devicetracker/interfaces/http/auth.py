# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any

from flask import Response, g, jsonify, request

from devicetracker.application.services.session_manager import SessionManager
from devicetracker.domain.users.entities import SessionToken
from devicetracker.shared.logging import logger


@dataclass(slots=True, frozen=True)
class SessionCookie:
    name: str
    max_age: int
    secure: bool = True
    samesite: str = "Lax"

    def attach(self, response: Response, session: SessionToken) -> Response:
        response.set_cookie(
            self.name,
            session.token,
            max_age=self.max_age,
            path="/",
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )
        return response

    def clear(self, response: Response) -> Response:
        response.delete_cookie(
            self.name, path="/", httponly=True, secure=self.secure, samesite=self.samesite
        )
        return response


def read_session_token(cookie_name: str) -> str:
    auth = request.headers.get("Authorization", "")
    token = ""
    if auth.startswith("Bearer "):
        token = auth[7:].strip()
    if not token:
        token = request.cookies.get(cookie_name, "")
    return token


def current_user_id() -> int:
    return g.user_id


def session_required(
    sessions: SessionManager, cookie: SessionCookie
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Deny the wrapped view with 401 unless the request carries a valid session."""

    def decorator(view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def inner(*args, **kwargs):
            token = read_session_token(cookie.name)
            user_id = sessions.validate(token)
            if user_id is None:
                logger.warning(
                    f"Auth failed ({'token rejected' if token else 'no token'}) "
                    f"on {request.method} {request.path}"
                )
                response = jsonify({"error": "unauthorized"})
                if request.cookies.get(cookie.name):
                    cookie.clear(response)
                return response, 401

            g.user_id = user_id
            logger.debug(f"Auth OK: user={user_id} {request.method} {request.path}")
            return view(*args, **kwargs)

        return inner

    return decorator
