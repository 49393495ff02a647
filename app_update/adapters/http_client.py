"""Minimal JSON-over-HTTP GET client built on urllib."""

import json
from typing import Any, Mapping, Optional
from urllib.error import HTTPError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from app_update.version import __version__

DEFAULT_USER_AGENT = f"app-update/{__version__}"


class JsonHttpClient:

    def get_json(
        self,
        url: str,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = 30.0,
    ) -> Any:
        """GET ``url`` and decode the JSON body.

        Raises URLError/OSError on transport failures, HTTPError on any status
        other than 200 and ValueError on a body that is not JSON.
        """
        if params:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{urlencode(params)}"

        request_headers = {"Accept": "application/json", "User-Agent": DEFAULT_USER_AGENT}
        request_headers.update(headers or {})
        req = Request(url, headers=request_headers)

        with urlopen(req, timeout=timeout) as resp:
            status = getattr(resp, "status", 200)
            if status != 200:
                raise HTTPError(url, status, f"Unexpected status {status}", resp.headers, None)
            return json.loads(resp.read().decode("utf-8"))
