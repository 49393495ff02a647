"""Ports (interfaces) for the hexagonal architecture."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from app_update.domain.model import (
    ConnectionType,
    InAppUpdateResult,
    NativeUpdateStatus,
    PackageInfo,
    UpdateDescriptor,
    UserChoice,
)
from app_update.domain.version import SemanticVersion


class VersionSourcePort(ABC):
    """Somewhere a newer version can be looked up."""

    @abstractmethod
    def fetch(self, current: SemanticVersion, package: PackageInfo) -> Optional[UpdateDescriptor]:
        ...


class InstallExecutorPort(ABC):
    @abstractmethod
    def install(self, descriptor: UpdateDescriptor) -> bool:
        ...


class KeyValueStorePort(ABC):
    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class ClockPort(ABC):
    @abstractmethod
    def now(self) -> datetime:
        ...


class NetworkPort(ABC):
    @abstractmethod
    def connection_type(self) -> ConnectionType:
        ...


class NativeStorePort(ABC):
    """The platform's in-app update SDK."""

    @abstractmethod
    def check_for_update(self) -> NativeUpdateStatus:
        ...

    @abstractmethod
    def perform_immediate_update(self) -> InAppUpdateResult:
        ...

    @abstractmethod
    def start_flexible_update(self) -> InAppUpdateResult:
        ...

    @abstractmethod
    def complete_flexible_update(self) -> None:
        ...


class UrlLauncherPort(ABC):
    @abstractmethod
    def open(self, url: str) -> bool:
        ...


class UpdatePresenterPort(ABC):
    @abstractmethod
    def present(self, descriptor: UpdateDescriptor, forced: bool) -> UserChoice:
        """Show the update and block until the user picks an action.

        When ``forced`` is true only the accept action may be offered.
        """
        ...
