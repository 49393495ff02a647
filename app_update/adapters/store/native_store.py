"""Version source that trusts the platform's in-app update SDK."""

import logging
from typing import Optional

from app_update.domain.model import PackageInfo, StoreOracleDescriptor, UpdateDescriptor
from app_update.domain.ports import NativeStorePort, VersionSourcePort
from app_update.domain.version import SemanticVersion

logger = logging.getLogger("app_update.store.native")


class NativeStoreSource(VersionSourcePort):

    def __init__(self, sdk: NativeStorePort):
        self.sdk = sdk

    def fetch(self, current: SemanticVersion, package: PackageInfo) -> Optional[UpdateDescriptor]:
        try:
            status = self.sdk.check_for_update()
        except Exception:
            logger.exception("Native store update check failed")
            return None

        current_code = package.build_number or "0"
        latest_code = status.available_version_code if status.available_version_code is not None else current_code
        return StoreOracleDescriptor(
            latest_version=SemanticVersion.from_build_code(latest_code),
            current_version=SemanticVersion.from_build_code(current_code),
            store_reports_update=status.update_available,
        )
