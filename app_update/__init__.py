"""Check for newer app versions and decide whether to prompt the user."""

from app_update.domain.errors import AppUpdateError, ConfigurationError, NetworkPolicyError, ParseError
from app_update.domain.model import (
    PackageInfo,
    StoreOracleDescriptor,
    UpdateConfig,
    UpdateDescriptor,
    UpdateEvent,
    UpdateFlowResult,
    UpdateFlowState,
    UpdateKind,
    UpdateStrategy,
    UserChoice,
)
from app_update.domain.version import SemanticVersion
from app_update.session import UpdateSession
from app_update.version import __version__

__all__ = [
    "AppUpdateError",
    "ConfigurationError",
    "NetworkPolicyError",
    "PackageInfo",
    "ParseError",
    "SemanticVersion",
    "StoreOracleDescriptor",
    "UpdateConfig",
    "UpdateDescriptor",
    "UpdateEvent",
    "UpdateFlowResult",
    "UpdateFlowState",
    "UpdateKind",
    "UpdateSession",
    "UpdateStrategy",
    "UserChoice",
    "__version__",
]
