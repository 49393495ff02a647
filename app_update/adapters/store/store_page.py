"""Install executor that sends the user to the store page."""

import logging

from app_update.adapters.store import store_urls
from app_update.domain.model import PackageInfo, UpdateConfig, UpdateDescriptor
from app_update.domain.ports import InstallExecutorPort, UrlLauncherPort

logger = logging.getLogger("app_update.store.page")


class StorePageExecutor(InstallExecutorPort):
    """Tries the native market link, then the web store, then the download URL."""

    def __init__(self, config: UpdateConfig, package: PackageInfo, launcher: UrlLauncherPort):
        self.config = config
        self.package = package
        self.launcher = launcher

    def candidate_urls(self, descriptor: UpdateDescriptor) -> list[str]:
        urls = store_urls(self.config, self.package.platform)
        if descriptor.download_url:
            urls.append(descriptor.download_url)
        return urls

    def install(self, descriptor: UpdateDescriptor) -> bool:
        for url in self.candidate_urls(descriptor):
            try:
                if self.launcher.open(url):
                    logger.info("Opened update page %s", url)
                    return True
            except Exception:
                logger.exception("Failed to open %s", url)
        logger.warning("No store page or download URL could be opened")
        return False
