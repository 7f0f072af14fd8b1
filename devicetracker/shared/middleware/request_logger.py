# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
import secrets
import time

from flask import Flask, Response, g, request

from devicetracker.shared.logging import (
    bind_request_id,
    current_request_id,
    logger,
    sanitize_message,
    unbind_request_id,
)

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_FORMAT = re.compile(r"[A-Za-z0-9._-]{1,64}")


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _request_id() -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_FORMAT.fullmatch(supplied):
        return supplied
    return secrets.token_urlsafe(8)


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """One line per request and response, tagged with the request id.

    The id comes from ``X-Request-ID`` when the client sends a well-formed
    one (at most 64 of ``[A-Za-z0-9._-]``) and is echoed back on the response.
    """

    @app.before_request
    def _start() -> None:
        bind_request_id(_request_id())
        g.request_started = time.perf_counter()
        if debug_mode:
            logger.debug(
                f"-> {request.method} {sanitize_message(request.full_path)} "
                f"from {_client_ip()} body_size={len(request.get_data())}"
            )
        else:
            logger.info(f"-> {request.method} {request.path} from {_client_ip()}")

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        logger.info(
            f"<- {request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.0f}ms user={g.get('user_id')}"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, current_request_id())
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"Request aborted: {type(exc).__name__} on {request.method} {request.path}")
        unbind_request_id()
