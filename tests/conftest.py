"""Shared in-memory adapters and fixtures for all bounded contexts."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from app_update.domain.model import (
    ConnectionType,
    InAppUpdateResult,
    NativeUpdateStatus,
    PackageInfo,
    UpdateConfig,
    UpdateDescriptor,
    UserChoice,
)
from app_update.domain.ports import (
    ClockPort,
    KeyValueStorePort,
    NativeStorePort,
    NetworkPort,
    UpdatePresenterPort,
    UrlLauncherPort,
    VersionSourcePort,
)
from app_update.domain.version import SemanticVersion
from app_update.services.cache_service import CacheService


# ── In-memory adapters ──────────────────────────────────────────────


class InMemoryStore(KeyValueStorePort):
    def __init__(self):
        self.data: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class BrokenStore(KeyValueStorePort):
    def get(self, key: str, default: Any = None) -> Any:
        raise OSError("disk unavailable")

    def set(self, key: str, value: Any) -> None:
        raise OSError("disk unavailable")

    def remove(self, key: str) -> None:
        raise OSError("disk unavailable")


class FixedClock(ClockPort):
    def __init__(self, moment: Optional[datetime] = None):
        self.moment = moment or datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.moment

    def advance(self, **kwargs) -> None:
        self.moment = self.moment + timedelta(**kwargs)


class FakeNetwork(NetworkPort):
    def __init__(self, connection: ConnectionType = ConnectionType.WIFI):
        self.connection = connection

    def connection_type(self) -> ConnectionType:
        return self.connection


class StaticSource(VersionSourcePort):
    def __init__(self, descriptor: Optional[UpdateDescriptor]):
        self.descriptor = descriptor
        self.calls = 0

    def fetch(self, current: SemanticVersion, package: PackageInfo) -> Optional[UpdateDescriptor]:
        self.calls += 1
        return self.descriptor


class ExplodingSource(VersionSourcePort):
    def __init__(self):
        self.calls = 0

    def fetch(self, current: SemanticVersion, package: PackageInfo) -> Optional[UpdateDescriptor]:
        self.calls += 1
        raise RuntimeError("sdk crashed")


class RecordingPresenter(UpdatePresenterPort):
    def __init__(self, choice: UserChoice = UserChoice.ACCEPTED):
        self.choice = choice
        self.shown: list[tuple[UpdateDescriptor, bool]] = []

    def present(self, descriptor: UpdateDescriptor, forced: bool) -> UserChoice:
        self.shown.append((descriptor, forced))
        return self.choice


class FakeNativeStore(NativeStorePort):
    def __init__(
        self,
        status: Optional[NativeUpdateStatus] = None,
        result: InAppUpdateResult = InAppUpdateResult.SUCCESS,
    ):
        self.status = status or NativeUpdateStatus(update_available=True, available_version_code=12)
        self.result = result
        self.calls: list[str] = []

    def check_for_update(self) -> NativeUpdateStatus:
        self.calls.append("check")
        return self.status

    def perform_immediate_update(self) -> InAppUpdateResult:
        self.calls.append("immediate")
        return self.result

    def start_flexible_update(self) -> InAppUpdateResult:
        self.calls.append("flexible")
        return self.result

    def complete_flexible_update(self) -> None:
        self.calls.append("complete")


class RecordingLauncher(UrlLauncherPort):
    def __init__(self, accepts: Optional[set[str]] = None):
        self.accepts = accepts
        self.opened: list[str] = []

    def open(self, url: str) -> bool:
        self.opened.append(url)
        return self.accepts is None or url in self.accepts


class FakeHttpClient:
    def __init__(self, response: Any = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    def get_json(self, url, params=None, headers=None, timeout=30.0):
        self.calls.append({"url": url, "params": dict(params or {}), "headers": dict(headers or {}), "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


class FakeCredentialStore:
    def __init__(self, available: bool = True):
        self.available = available
        self.data: dict[str, str] = {}

    def get_header(self, name: str):
        return self.data.get(name.lower())

    def set_header(self, name: str, value: str) -> bool:
        if not self.available:
            return False
        if value:
            self.data[name.lower()] = value
        else:
            self.data.pop(name.lower(), None)
        return True


class EventRecorder:
    def __init__(self):
        self.events: list[tuple[str, dict]] = []

    def __call__(self, event, data):
        self.events.append((event.value, data))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]


def descriptor(latest: str = "1.2.0", current: str = "1.0.0", **kwargs) -> UpdateDescriptor:
    return UpdateDescriptor(
        latest_version=SemanticVersion.parse(latest),
        current_version=SemanticVersion.parse(current),
        **kwargs,
    )


# ── Shared fixtures ─────────────────────────────────────────────────


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def cache(store, clock):
    return CacheService(store, clock)


@pytest.fixture
def android_app():
    return PackageInfo(version="1.0.0", build_number="10", package_name="com.example.app", platform="android")


@pytest.fixture
def ios_app():
    return PackageInfo(version="1.0.0", build_number="10", package_name="com.example.app", platform="ios")


@pytest.fixture
def backend_config():
    return UpdateConfig(custom_update_url="https://updates.example.com/check")


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def credentials():
    return FakeCredentialStore()
