from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests
from requests import Response

from multiweather.errors import TransportError, UpstreamFormatError, UpstreamStatusError


@dataclass(frozen=True)
class RequestConfig:
    timeout: float = 10.0


class HTTPBackend:
    """Base class that adds timeouts and error mapping for JSON HTTP backends."""

    name = "http"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            self._log.error("%s returned %s: %s", self.name, response.status_code, response.text[:200])
            raise UpstreamStatusError(response.status_code, f"{self.name}: HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request to %s timed out", self.name, exc_info=exc)
            raise TransportError(f"{self.name}: timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request to %s failed", self.name, exc_info=exc)
            raise TransportError(f"{self.name}: request failed") from exc
        return self._handle_response(response)

    def _get_json(self, url: str, **kwargs) -> Mapping[str, Any]:
        response = self._request("GET", url, **kwargs)
        try:
            data = response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON from %s", self.name, exc_info=exc)
            raise UpstreamFormatError(f"{self.name}: invalid json") from exc
        if not isinstance(data, Mapping):
            raise UpstreamFormatError(f"{self.name}: expected a JSON object")
        return data


def dig(payload: Mapping[str, Any], *keys: str, source: str) -> Any:
    """Walk nested mappings, raising ``UpstreamFormatError`` on the first gap."""
    current: Any = payload
    for key in keys:
        if not isinstance(current, Mapping) or key not in current:
            raise UpstreamFormatError(f"{source}: missing {'.'.join(keys)}")
        current = current[key]
    return current


def as_float(value: Any, *, source: str, field: str) -> float:
    # bool is an int subclass, but never a temperature
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise UpstreamFormatError(f"{source}: {field} is not a number")
    try:
        number = float(value)
    except ValueError as exc:
        raise UpstreamFormatError(f"{source}: {field} is not a number") from exc
    if not math.isfinite(number):
        raise UpstreamFormatError(f"{source}: {field} is not finite")
    return number


__all__ = ["HTTPBackend", "RequestConfig", "dig", "as_float"]
