# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from devicetracker.application.services.auth_service import AuthService
from devicetracker.application.services.session_manager import SessionManager
from devicetracker.domain.users.entities import SessionToken
from devicetracker.interfaces.http.auth import (
    SessionCookie,
    current_user_id,
    read_session_token,
    session_required,
)
from devicetracker.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    CheckUsernameRequestDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
)
from devicetracker.interfaces.http.validation import parse_body
from devicetracker.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        auth_service: AuthService,
        session_manager: SessionManager,
        cookie: SessionCookie,
    ) -> None:
        self._auth = auth_service
        self._sessions = session_manager
        self._cookie = cookie

    def _signed_in(self, session: SessionToken, username: str) -> Response:
        payload = AuthSuccessDTO(id=session.user_id, username=username).model_dump()
        return self._cookie.attach(jsonify(payload), session)

    def register(self) -> tuple[Response, int]:
        dto = parse_body(RegisterRequestDTO)
        session = self._auth.register(dto.username, dto.password, dto.invite_code)
        logger.info(f"auth.register: cookie issued (user_id={session.user_id})")
        return self._signed_in(session, dto.username), 200

    def login(self) -> tuple[Response, int]:
        dto = parse_body(LoginRequestDTO)
        session = self._auth.login(dto.username, dto.password)
        logger.info(f"auth.login: cookie issued (user_id={session.user_id})")
        return self._signed_in(session, dto.username), 200

    def logout(self) -> tuple[Response, int]:
        self._auth.logout(read_session_token(self._cookie.name))
        response = self._cookie.clear(jsonify({"ok": True}))
        logger.info("auth.logout: ok")
        return response, 200

    def check_username(self) -> tuple[Response, int]:
        dto = parse_body(CheckUsernameRequestDTO)
        return jsonify({"exists": self._auth.username_exists(dto.username)}), 200

    def me(self) -> tuple[Response, int]:
        user = self._auth.current_user(current_user_id())
        if user is None:
            return jsonify({"error": "unauthorized"}), 401
        return jsonify(AuthSuccessDTO(id=user.id, username=user.username).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        guard = session_required(self._sessions, self._cookie)
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/check-username", view_func=self.check_username, methods=["POST"])
        bp.add_url_rule("/me", view_func=guard(self.me), methods=["GET"])
        return bp
