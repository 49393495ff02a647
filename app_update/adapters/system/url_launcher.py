"""Opens store pages and download links in the user's browser."""

import webbrowser

from app_update.domain.ports import UrlLauncherPort


class WebBrowserLauncher(UrlLauncherPort):

    def open(self, url: str) -> bool:
        return webbrowser.open(url)
