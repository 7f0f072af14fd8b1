from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, date, datetime, timedelta

import pytest

from devicetracker.application.services.auth_service import AuthService
from devicetracker.application.services.device_service import DeviceService
from devicetracker.application.services.session_manager import SessionManager
from devicetracker.domain.devices.entities import Device, DevicePatch, compose_location
from devicetracker.domain.users.entities import SessionToken, User
from devicetracker.domain.users.exceptions import UsernameTakenError

INVITE_CODE = "open-sesame"
TODAY = date(2025, 6, 15)
NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> User | None:
        return self._users.get(username)

    def find_by_id(self, user_id: int) -> User | None:
        return next((u for u in self._users.values() if u.id == user_id), None)

    def add(self, username: str, password_hash: str) -> User:
        if username in self._users:
            raise UsernameTakenError()
        user = User(
            id=self._seq,
            username=username,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
        )
        self._seq += 1
        self._users[username] = user
        return user


class InMemorySessionTokenRepository:
    def __init__(self) -> None:
        self.records: dict[str, SessionToken] = {}

    def add(self, user_id: int, token: str, expires_at: datetime) -> SessionToken:
        session = SessionToken(user_id=user_id, token=token, expires_at=expires_at)
        self.records[token] = session
        return session

    def find_by_token(self, token: str) -> SessionToken | None:
        return self.records.get(token)

    def delete(self, token: str) -> bool:
        return self.records.pop(token, None) is not None

    def force_expiry(self, token: str, expires_at: datetime) -> None:
        self.records[token] = replace(self.records[token], expires_at=expires_at)


class InMemoryDeviceRepository:
    def __init__(self) -> None:
        self._rows: dict[int, Device] = {}
        self._seq = 1
        self._tick = datetime(2025, 1, 1, tzinfo=UTC)

    def _next_time(self) -> datetime:
        self._tick += timedelta(seconds=1)
        return self._tick

    def add(self, *, name: str, expiry_date: str, building: str, room: str) -> Device:
        stamp = self._next_time()
        device = Device(
            id=self._seq,
            name=name,
            expiry_date=expiry_date,
            building=building,
            room=room,
            location=compose_location(building, room),
            created_at=stamp,
            updated_at=stamp,
        )
        self._rows[device.id] = device
        self._seq += 1
        return device

    def get(self, device_id: int) -> Device | None:
        return self._rows.get(device_id)

    def list_recent_first(self) -> Sequence[Device]:
        return sorted(self._rows.values(), key=lambda d: (d.created_at, d.id), reverse=True)

    def apply_patch(self, device_id: int, patch: DevicePatch) -> Device | None:
        current = self._rows.get(device_id)
        if current is None:
            return None
        changes = patch.changes_for(current)
        if not changes:
            return current
        updated = replace(current, updated_at=self._next_time(), **changes)
        self._rows[device_id] = updated
        return updated

    def delete(self, device_id: int) -> bool:
        return self._rows.pop(device_id, None) is not None


class DeterministicHasher:
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class MutableClock:
    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def session_tokens() -> InMemorySessionTokenRepository:
    return InMemorySessionTokenRepository()


@pytest.fixture()
def clock() -> MutableClock:
    return MutableClock()


@pytest.fixture()
def session_manager(
    users: InMemoryUserRepository,
    session_tokens: InMemorySessionTokenRepository,
    clock: MutableClock,
) -> SessionManager:
    counter = iter(range(1, 10_000))
    return SessionManager(
        users=users,
        sessions=session_tokens,
        token_factory=lambda: f"token-{next(counter)}",
        clock=clock,
    )


@pytest.fixture()
def password_hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def auth_service(
    users: InMemoryUserRepository,
    session_manager: SessionManager,
    password_hasher: DeterministicHasher,
) -> AuthService:
    return AuthService(
        users=users,
        sessions=session_manager,
        password_hasher=password_hasher,
        invite_code=INVITE_CODE,
    )


@pytest.fixture()
def device_repository() -> InMemoryDeviceRepository:
    return InMemoryDeviceRepository()


@pytest.fixture()
def device_service(device_repository: InMemoryDeviceRepository) -> DeviceService:
    return DeviceService(devices=device_repository, today=lambda: TODAY)


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def invite_code() -> str:
    return INVITE_CODE
