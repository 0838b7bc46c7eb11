import logging
from typing import Any, Dict, Optional

import requests

from playground.errors import FormatServiceError, MalformedResponse
from .base import FormatResponse

logger = logging.getLogger(__name__)


class BlackApiService:
    def __init__(self, name: str, base_url: str, time_out_s: int = 30):
        self.name = name
        self.base_url = base_url.rstrip('/')
        self.timeout_s = time_out_s

    def __repr__(self) -> str:
        return f"BlackApiService(name={self.name!r}, base_url={self.base_url!r})"

    def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            r = requests.request(method, url, timeout=self.timeout_s, **kwargs)
            r.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise FormatServiceError(f"{method} {url} failed with HTTP {status}", url=url, status=status) from e
        except requests.RequestException as e:
            raise FormatServiceError(f"{method} {url} failed: {e}", url=url) from e
        try:
            return r.json()
        except ValueError as e:
            raise MalformedResponse(f"{method} {url} returned a non-JSON body", url=url, status=r.status_code) from e

    def get_version(self) -> str:
        data = self._request("GET", f"{self.base_url}/version")
        if not isinstance(data, dict) or "version" not in data:
            raise MalformedResponse(f"{self.name}: version endpoint returned no version", url=f"{self.base_url}/version")
        return str(data["version"])

    def fetch(self, state: Optional[str] = None) -> FormatResponse:
        params = {"state": state} if state else None
        logger.debug("%s: fetch state=%s", self.name, state)
        data = self._request("GET", self.base_url, params=params)
        return FormatResponse.from_json(data)

    def format(self, source: str, options: Dict[str, Any]) -> FormatResponse:
        payload: Dict[str, Any] = {
            "source": source,
            "options": options,
        }
        logger.debug("%s: format %d chars", self.name, len(source))
        data = self._request("POST", self.base_url, json=payload)
        return FormatResponse.from_json(data)
