from __future__ import annotations

from datetime import date, timedelta

import pytest
from flask import Flask

from devicetracker.application.services.device_service import DeviceService
from devicetracker.application.services.session_manager import SessionManager
from devicetracker.interfaces.http.auth import SessionCookie
from devicetracker.interfaces.http.controllers.devices_controller import DevicesController
from devicetracker.shared.middleware.error_handler import configure_error_handling


@pytest.fixture()
def flask_app(device_service: DeviceService, session_manager: SessionManager) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    controller = DevicesController(
        device_service=device_service,
        session_manager=session_manager,
        cookie=SessionCookie(name="sessionToken", max_age=60, secure=False),
    )
    app.register_blueprint(controller.as_blueprint())
    return app


@pytest.fixture()
def auth_headers(users, session_manager: SessionManager) -> dict[str, str]:
    user = users.add("alice", "hashed:secret1")
    session = session_manager.issue(user.id)
    return {"Authorization": f"Bearer {session.token}"}


def _payload(today: date, days: int, **overrides) -> dict[str, str]:
    body = {
        "name": "Door card",
        "expiryDate": (today + timedelta(days=days)).isoformat(),
        "building": "A",
        "room": "101",
    }
    body.update(overrides)
    return body


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/api/devices"),
        ("post", "/api/devices"),
        ("get", "/api/devices/stats"),
        ("get", "/api/devices/1"),
        ("patch", "/api/devices/1"),
        ("delete", "/api/devices/1"),
    ],
)
def test_routes_require_session(flask_app: Flask, method: str, path: str) -> None:
    with flask_app.test_client() as client:
        response = getattr(client, method)(path, headers={"Authorization": "Bearer forged"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}


def test_create_returns_device_with_camel_case_fields(
    flask_app: Flask, auth_headers: dict[str, str], today: date
) -> None:
    with flask_app.test_client() as client:
        response = client.post("/api/devices", json=_payload(today, 5), headers=auth_headers)

    assert response.status_code == 201
    body = response.get_json()
    assert body["location"] == "A-101"
    assert body["status"] == "expiring"
    assert body["expiryDate"] == (today + timedelta(days=5)).isoformat()
    assert {"id", "createdAt", "updatedAt"} <= body.keys()


@pytest.mark.parametrize(
    "override",
    [
        {"name": ""},
        {"building": "   "},
        {"expiryDate": "05/06/2025"},
        {"expiryDate": "2099-02-30"},
        {"room": None},
    ],
)
def test_create_validates_payload(
    flask_app: Flask, auth_headers: dict[str, str], today: date, override: dict
) -> None:
    with flask_app.test_client() as client:
        response = client.post(
            "/api/devices", json=_payload(today, 5, **override), headers=auth_headers
        )

    assert response.status_code == 422


def test_list_filters_and_searches(
    flask_app: Flask, auth_headers: dict[str, str], today: date
) -> None:
    with flask_app.test_client() as client:
        client.post("/api/devices", json=_payload(today, 60, name="Router"), headers=auth_headers)
        client.post(
            "/api/devices",
            json=_payload(today, -2, name="Badge", building="B", room="7"),
            headers=auth_headers,
        )

        everything = client.get("/api/devices", headers=auth_headers).get_json()["items"]
        expired = client.get("/api/devices?status=expired", headers=auth_headers).get_json()
        searched = client.get("/api/devices?search=ROUT&status=", headers=auth_headers).get_json()
        bad_status = client.get("/api/devices?status=broken", headers=auth_headers)

    assert [item["name"] for item in everything] == ["Badge", "Router"]
    assert [item["name"] for item in expired["items"]] == ["Badge"]
    assert [item["name"] for item in searched["items"]] == ["Router"]
    assert bad_status.status_code == 422


def test_get_update_delete_roundtrip(
    flask_app: Flask, auth_headers: dict[str, str], today: date
) -> None:
    with flask_app.test_client() as client:
        created = client.post("/api/devices", json=_payload(today, 30), headers=auth_headers)
        device_id = created.get_json()["id"]

        fetched = client.get(f"/api/devices/{device_id}", headers=auth_headers)
        patched = client.patch(
            f"/api/devices/{device_id}", json={"room": "305"}, headers=auth_headers
        )
        deleted = client.delete(f"/api/devices/{device_id}", headers=auth_headers)
        gone = client.get(f"/api/devices/{device_id}", headers=auth_headers)

    assert fetched.get_json()["name"] == "Door card"
    assert patched.status_code == 200
    assert patched.get_json()["location"] == "A-305"
    assert deleted.get_json() == {"ok": True}
    assert gone.status_code == 404
    assert gone.get_json() == {"error": "device_not_found", "context": {"device_id": device_id}}


@pytest.mark.parametrize(
    "body",
    [
        {"name": "   "},
        {"building": ""},
        {"room": "  "},
        {"expiryDate": "2099-02-30"},
        {"expiryDate": "2025-13-01"},
    ],
)
def test_update_rejects_blank_fields_and_impossible_dates(
    flask_app: Flask, auth_headers: dict[str, str], today: date, body: dict
) -> None:
    with flask_app.test_client() as client:
        created = client.post("/api/devices", json=_payload(today, 30), headers=auth_headers)
        device_id = created.get_json()["id"]

        patched = client.patch(f"/api/devices/{device_id}", json=body, headers=auth_headers)
        current = client.get(f"/api/devices/{device_id}", headers=auth_headers).get_json()

    assert patched.status_code == 422
    assert current == created.get_json()


def test_missing_device_is_404_for_update_and_delete(
    flask_app: Flask, auth_headers: dict[str, str]
) -> None:
    with flask_app.test_client() as client:
        patched = client.patch("/api/devices/99", json={"name": "x"}, headers=auth_headers)
        deleted = client.delete("/api/devices/99", headers=auth_headers)

    assert patched.status_code == 404
    assert deleted.status_code == 404


def test_stats(flask_app: Flask, auth_headers: dict[str, str], today: date) -> None:
    with flask_app.test_client() as client:
        for days in (30, 7, -1):
            client.post("/api/devices", json=_payload(today, days), headers=auth_headers)
        response = client.get("/api/devices/stats", headers=auth_headers)

    assert response.get_json() == {"total": 3, "normal": 1, "expiring": 1, "expired": 1}
