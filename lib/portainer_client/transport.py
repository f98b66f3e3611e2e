from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

from .config_types import ClientConfig
from .errors import ApiError, AuthError, InvalidResponseError, NetworkError, RequestTimeout

log = logging.getLogger(__name__)

API_ROOT = "/api"
LOGS_TIMEOUT_S = 60.0
USER_AGENT = "portainer-client/0.1.0"


def normalize_base_url(base_url: str) -> str:
    # exactly one trailing slash
    return base_url[:-1] if base_url.endswith("/") else base_url


def classify_response(status_code: int, body: str, path: str) -> ApiError:
    details = body[:1000] if body else None
    if status_code == 401:
        return AuthError(status_code, "Invalid API key or expired token", details)
    if status_code == 403:
        return AuthError(status_code, "Insufficient permissions for this operation", details)
    if status_code == 404:
        return ApiError(status_code, f"Resource not found: {path}", details)

    msg = f"Portainer API error: {status_code}"
    try:
        data = json.loads(body) if body else None
    except ValueError:
        data = None
    if isinstance(data, dict):
        msg = str(data.get("message") or data.get("details") or msg)
    return ApiError(status_code, msg, details)


class Transport:
    def __init__(self, cfg: ClientConfig, *, http_transport: httpx.AsyncBaseTransport | None = None):
        self._cfg = cfg
        self._base_url = normalize_base_url(cfg.base_url)
        self._headers = {
            "User-Agent": f"portainer-client/{cfg.client_version}" if cfg.client_version else USER_AGENT,
            "X-API-Key": cfg.api_key,
        }
        self._http_transport = http_transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, path: str) -> str:
        return f"{self._base_url}{API_ROOT}{path}"

    async def request(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            timeout_s: float | None = None,
            raw: bool = False,
    ) -> Any:
        if timeout_s is None:
            timeout_s = self._cfg.timeout_s
        r = await self._send(method, path, json_body=json_body, timeout_s=timeout_s)

        text = r.text
        if not text:
            return {}
        if raw:
            return text
        try:
            return json.loads(text)
        except ValueError as e:
            raise InvalidResponseError(
                r.status_code,
                f"Invalid JSON in response to {method} {path}: {e}",
                text[:1000],
            ) from e

    async def request_bytes(self, path: str, *, timeout_s: float = LOGS_TIMEOUT_S) -> bytes:
        r = await self._send("GET", path, timeout_s=timeout_s)
        return r.content

    async def _send(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            timeout_s: float,
    ) -> httpx.Response:
        url = self.url_for(path)
        try:
            async with asyncio.timeout(timeout_s):
                async with httpx.AsyncClient(
                    headers=self._headers,
                    timeout=None,
                    transport=self._http_transport,
                    follow_redirects=True,
                ) as http:
                    r = await http.request(method, url, json=json_body)
        except (TimeoutError, httpx.TimeoutException) as e:
            log.debug("%s %s timed out after %ss", method, path, timeout_s)
            raise RequestTimeout(timeout_s) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            log.debug("%s %s failed: %r", method, path, e)
            raise NetworkError(f"Cannot connect to Portainer at {self._base_url}: {str(e) or type(e).__name__}") from e

        log.debug("%s %s -> %s", method, path, r.status_code)
        if not r.is_success:
            raise classify_response(r.status_code, r.text, path)
        return r
