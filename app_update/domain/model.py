"""Pure domain objects, no framework dependency."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from app_update.domain.version import SemanticVersion


class UpdateKind(str, Enum):
    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


class UpdateStrategy(str, Enum):
    FLEXIBLE = "flexible"
    IMMEDIATE = "immediate"
    OPTIONAL = "optional"


class UpdateEvent(str, Enum):
    CHECK_STARTED = "check_started"
    CHECK_COMPLETED = "check_completed"
    CHECK_FAILED = "check_failed"
    UPDATE_AVAILABLE = "update_available"
    UPDATE_NOT_AVAILABLE = "update_not_available"
    UPDATE_DIALOG_SHOWN = "update_dialog_shown"
    UPDATE_ACCEPTED = "update_accepted"
    UPDATE_DISMISSED = "update_dismissed"
    UPDATE_INSTALL_STARTED = "update_install_started"
    UPDATE_INSTALL_COMPLETED = "update_install_completed"
    UPDATE_INSTALL_FAILED = "update_install_failed"


class UserChoice(str, Enum):
    ACCEPTED = "accepted"
    DEFERRED = "deferred"
    DISMISSED = "dismissed"


class UpdateFlowState(str, Enum):
    NO_UPDATE = "no_update"
    SUPPRESSED = "suppressed"
    DEFERRED = "deferred"
    DISMISSED = "dismissed"
    UPDATE_INITIATED = "update_initiated"


class ConnectionType(str, Enum):
    WIFI = "wifi"
    LAN = "lan"
    CELLULAR = "cellular"
    UNKNOWN = "unknown"


class InAppUpdateResult(str, Enum):
    SUCCESS = "success"
    USER_DENIED = "user_denied"
    FAILED = "failed"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def strict_bool(value: Any, default: bool = False) -> bool:
    """Only JSON booleans count; the string "false" must not read as true."""
    if value is None:
        return default
    if not isinstance(value, bool):
        raise TypeError(f"Expected a boolean, got {type(value).__name__}")
    return value


def format_file_size(size: int) -> str:
    kb = 1024
    mb = kb * 1024
    gb = mb * 1024
    if size >= gb:
        return f"{size / gb:.2f} GB"
    if size >= mb:
        return f"{size / mb:.2f} MB"
    if size >= kb:
        return f"{size / kb:.2f} KB"
    return f"{size} B"


@dataclass(frozen=True)
class UpdateDescriptor:
    """A prospective update, built fresh for each check and never mutated."""

    latest_version: SemanticVersion
    current_version: SemanticVersion
    release_notes: Optional[str] = None
    download_url: Optional[str] = None
    is_forced: bool = False
    is_critical: bool = False
    minimum_supported_version: Optional[SemanticVersion] = None
    release_date: Optional[datetime] = None
    file_size_bytes: Optional[int] = None
    metadata: Optional[Mapping[str, Any]] = None

    @property
    def update_available(self) -> bool:
        return self.latest_version > self.current_version

    @property
    def below_minimum(self) -> bool:
        if self.minimum_supported_version is None:
            return False
        return self.current_version < self.minimum_supported_version

    @property
    def forced(self) -> bool:
        return self.is_forced or self.below_minimum

    @property
    def update_kind(self) -> UpdateKind:
        if not self.update_available:
            return UpdateKind.NONE
        if self.latest_version.major > self.current_version.major:
            return UpdateKind.MAJOR
        if self.latest_version.minor > self.current_version.minor:
            return UpdateKind.MINOR
        return UpdateKind.PATCH

    @property
    def formatted_file_size(self) -> str:
        if self.file_size_bytes is None:
            return ""
        return format_file_size(self.file_size_bytes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UpdateDescriptor":
        """Build from the backend JSON shape. Raises KeyError/TypeError/ParseError on bad input."""
        minimum = data.get("minimum_supported_version")
        metadata = data.get("metadata")
        return cls(
            latest_version=SemanticVersion.parse(str(data["latest_version"])),
            current_version=SemanticVersion.parse(str(data["current_version"])),
            release_notes=data.get("release_notes"),
            download_url=data.get("download_url"),
            is_forced=strict_bool(data.get("is_forced"), False),
            is_critical=strict_bool(data.get("is_critical"), False),
            minimum_supported_version=SemanticVersion.parse(str(minimum)) if minimum else None,
            release_date=parse_timestamp(data.get("release_date")),
            file_size_bytes=optional_int(data.get("file_size_bytes")),
            metadata=dict(metadata) if isinstance(metadata, Mapping) else None,
        )

    def to_dict(self) -> dict:
        return {
            "latest_version": str(self.latest_version),
            "current_version": str(self.current_version),
            "release_notes": self.release_notes,
            "download_url": self.download_url,
            "is_forced": self.is_forced,
            "is_critical": self.is_critical,
            "minimum_supported_version": (
                str(self.minimum_supported_version) if self.minimum_supported_version else None
            ),
            "release_date": self.release_date.isoformat() if self.release_date else None,
            "file_size_bytes": self.file_size_bytes,
            "metadata": dict(self.metadata) if self.metadata is not None else None,
        }


@dataclass(frozen=True)
class StoreOracleDescriptor(UpdateDescriptor):
    """Descriptor built from a native store SDK that only knows version codes.

    Both versions carry the store version code in the build slot. Whether an
    update exists is the SDK's answer, not a version comparison.
    """

    store_reports_update: bool = False

    @property
    def update_available(self) -> bool:
        return self.store_reports_update

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StoreOracleDescriptor":
        base = UpdateDescriptor.from_dict(data)
        values = {f.name: getattr(base, f.name) for f in dataclasses.fields(UpdateDescriptor)}
        return cls(**values, store_reports_update=strict_bool(data.get("store_reports_update"), False))

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["store_reports_update"] = self.store_reports_update
        return data


def descriptor_from_dict(data: Mapping[str, Any]) -> UpdateDescriptor:
    if "store_reports_update" in data:
        return StoreOracleDescriptor.from_dict(data)
    return UpdateDescriptor.from_dict(data)


@dataclass(frozen=True)
class CacheEntry:
    descriptor: UpdateDescriptor
    fetched_at: datetime


@dataclass(frozen=True)
class DismissalState:
    dismissed: bool = False
    dismissed_version: Optional[str] = None
    dismiss_count: int = 0


@dataclass(frozen=True)
class PackageInfo:
    """The installed application as seen by the update checks."""

    version: str
    build_number: str = ""
    package_name: str = ""
    platform: str = "linux"

    @property
    def semantic_version(self) -> SemanticVersion:
        return SemanticVersion.parse(self.version)


@dataclass(frozen=True)
class NativeUpdateStatus:
    update_available: bool
    available_version_code: Optional[int] = None


AnalyticsCallback = Callable[[UpdateEvent, Optional[dict]], None]


@dataclass(frozen=True)
class UpdateConfig:
    play_store_id: Optional[str] = None
    app_store_id: Optional[str] = None
    custom_update_url: Optional[str] = None
    custom_headers: Optional[Mapping[str, str]] = None
    strategy: UpdateStrategy = UpdateStrategy.FLEXIBLE
    background_check_interval_hours: int = 24
    enable_background_check: bool = False
    show_dialog_automatically: bool = True
    enable_caching: bool = True
    cache_duration_hours: int = 6
    request_timeout_seconds: int = 30
    wifi_only: bool = False
    custom_user_agent: Optional[str] = None
    region_code: Optional[str] = None
    test_group: Optional[str] = None
    enable_analytics: bool = False
    analytics_callback: Optional[AnalyticsCallback] = field(default=None, compare=False)

    def is_valid(self) -> bool:
        return bool(self.play_store_id or self.app_store_id or self.custom_update_url)

    def replace(self, **changes) -> "UpdateConfig":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "play_store_id": self.play_store_id,
            "app_store_id": self.app_store_id,
            "custom_update_url": self.custom_update_url,
            "custom_headers": dict(self.custom_headers) if self.custom_headers else None,
            "strategy": self.strategy.value,
            "background_check_interval_hours": self.background_check_interval_hours,
            "enable_background_check": self.enable_background_check,
            "show_dialog_automatically": self.show_dialog_automatically,
            "enable_caching": self.enable_caching,
            "cache_duration_hours": self.cache_duration_hours,
            "request_timeout_seconds": self.request_timeout_seconds,
            "wifi_only": self.wifi_only,
            "custom_user_agent": self.custom_user_agent,
            "region_code": self.region_code,
            "test_group": self.test_group,
            "enable_analytics": self.enable_analytics,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UpdateConfig":
        headers = data.get("custom_headers")
        try:
            strategy = UpdateStrategy(data.get("strategy") or UpdateStrategy.FLEXIBLE.value)
        except ValueError:
            strategy = UpdateStrategy.FLEXIBLE
        return cls(
            play_store_id=data.get("play_store_id"),
            app_store_id=data.get("app_store_id"),
            custom_update_url=data.get("custom_update_url"),
            custom_headers={str(k): str(v) for k, v in headers.items()} if isinstance(headers, Mapping) else None,
            strategy=strategy,
            background_check_interval_hours=int(data.get("background_check_interval_hours", 24)),
            enable_background_check=strict_bool(data.get("enable_background_check"), False),
            show_dialog_automatically=strict_bool(data.get("show_dialog_automatically"), True),
            enable_caching=strict_bool(data.get("enable_caching"), True),
            cache_duration_hours=int(data.get("cache_duration_hours", 6)),
            request_timeout_seconds=int(data.get("request_timeout_seconds", 30)),
            wifi_only=strict_bool(data.get("wifi_only"), False),
            custom_user_agent=data.get("custom_user_agent"),
            region_code=data.get("region_code"),
            test_group=data.get("test_group"),
            enable_analytics=strict_bool(data.get("enable_analytics"), False),
        )


@dataclass(frozen=True)
class UpdateFlowResult:
    state: UpdateFlowState
    descriptor: Optional[UpdateDescriptor] = None
    choice: Optional[UserChoice] = None

    @property
    def presented(self) -> bool:
        return self.choice is not None
