from __future__ import annotations

import re

import pytest
from flask import Flask

from devicetracker.shared.config import AppConfig, SecurityConfig
from devicetracker.shared.logging import sanitize_message
from devicetracker.shared.middleware.error_handler import configure_error_handling
from devicetracker.shared.middleware.request_logger import configure_request_logging


@pytest.fixture()
def bare_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaput")

    @app.get("/ok")
    def ok():
        return {"ok": True}

    return app


@pytest.mark.parametrize(
    "raw",
    [
        "Authorization: Bearer abcdefghijklmnop",
        "cookie sessionToken=abc123def456; Path=/",
        "login payload password=hunter22",
        "invite_code: open-sesame",
        "db postgresql://app:s3cret@db:5432/devices",
    ],
)
def test_secrets_are_redacted(raw: str) -> None:
    cleaned = sanitize_message(raw)

    assert "***" in cleaned
    for secret in ("abcdefghijklmnop", "abc123def456", "hunter22", "open-sesame", "s3cret"):
        assert secret not in cleaned


def test_plain_messages_pass_through() -> None:
    assert sanitize_message("device.create: ok (device_id=3)") == "device.create: ok (device_id=3)"


def test_unknown_route_is_json_404(bare_app: Flask) -> None:
    response = bare_app.test_client().get("/nowhere")

    assert response.status_code == 404
    assert response.get_json() == {"error": "not_found"}


def test_unhandled_exception_is_json_500(bare_app: Flask) -> None:
    response = bare_app.test_client().get("/boom")

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}


def test_request_id_is_echoed(bare_app: Flask) -> None:
    client = bare_app.test_client()

    supplied = client.get("/ok", headers={"X-Request-ID": "req-42"})
    generated = client.get("/ok")

    assert supplied.headers["X-Request-ID"] == "req-42"
    assert generated.headers["X-Request-ID"] not in ("", "-", "req-42")


@pytest.mark.parametrize(
    "supplied",
    ["x" * 65, "id with spaces", "evil\\nforged-line", "<script>"],
)
def test_malformed_request_id_is_replaced(bare_app: Flask, supplied: str) -> None:
    response = bare_app.test_client().get("/ok", headers={"X-Request-ID": supplied})

    echoed = response.headers["X-Request-ID"]
    assert echoed != supplied
    assert re.fullmatch(r"[A-Za-z0-9_-]{1,64}", echoed)


def test_allowed_origins_accepts_comma_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

    assert SecurityConfig().allowed_origins == ["https://a.example", "https://b.example"]


def test_blank_invite_code_means_unset() -> None:
    assert AppConfig(invite_code="   ").invite_code is None


def test_production_refuses_default_secret() -> None:
    with pytest.raises(SystemExit):
        AppConfig(app_env="production", secret_key="dev")


def test_production_warnings_list_weak_settings() -> None:
    config = AppConfig(
        app_env="production",
        secret_key="a-long-random-value",
        invite_code=None,
        security=SecurityConfig(cookie_secure=False, allowed_origins=["*"]),
    )

    assert len(config.production_warnings()) == 3
