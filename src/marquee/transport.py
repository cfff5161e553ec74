"""Promise-style HTTP transport built on httpx.

``Transport.get(url, options)`` returns a ``TransportResponse`` for any
status in the 200–300 range and raises ``TransportError`` otherwise.
The error carries the response (when there is one) so page ``on_error``
hooks can read the payload.

Options (all optional)::

    {
        "response_type": "json",   # or "text"
        "headers": {"Accept": "application/json"},
        "user": "...", "password": "...",   # basic auth
        "timeout": 10.0,
        "data": {...} | "raw body",
        "method": "POST",           # overrides the verb
        "async": True,              # accepted for compatibility; always async
    }
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from marquee.errors import TransportError

logger = logging.getLogger("marquee.transport")

DEFAULT_OPTIONS: dict[str, Any] = {
    "response_type": "json",
    "async": True,
}


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """A completed request.

    ``payload`` is the decoded body: parsed JSON for ``response_type="json"``
    (``None`` when the body is not valid JSON), the text otherwise.
    """

    status: int
    payload: Any
    url: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status <= 300


class Transport:
    """Thin async wrapper over ``httpx.AsyncClient``.

    A client can be injected (tests pass one built on ``httpx.MockTransport``);
    otherwise a client is created per request.
    """

    __slots__ = ("_base_url", "_client", "_defaults", "_timeout")

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        response_type: str = "json",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client
        self._defaults: dict[str, Any] = {**DEFAULT_OPTIONS, "response_type": response_type}

    def set_options(self, **options: Any) -> None:
        """Override default request options (shallow)."""
        self._defaults.update(options)

    async def get(self, url: str, options: Mapping[str, Any] | None = None) -> TransportResponse:
        return await self.request("GET", url, options)

    async def post(self, url: str, options: Mapping[str, Any] | None = None) -> TransportResponse:
        return await self.request("POST", url, options)

    async def put(self, url: str, options: Mapping[str, Any] | None = None) -> TransportResponse:
        return await self.request("PUT", url, options)

    async def delete(self, url: str, options: Mapping[str, Any] | None = None) -> TransportResponse:
        return await self.request("DELETE", url, options)

    async def request(
        self,
        method: str,
        url: str,
        options: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        """Perform a request and decode the body per ``response_type``.

        Raises ``TypeError`` if no url is given and ``TransportError``
        for failed requests.
        """
        if not url or not isinstance(url, str):
            msg = "No url specified for the request."
            raise TypeError(msg)

        opts = {**self._defaults, **(options or {})}
        method = str(opts.get("method") or method).upper()
        full_url = self._resolve_url(url)
        logger.debug("initiating request... %s %s", method, full_url)

        kwargs = self._request_kwargs(opts)
        try:
            if self._client is not None:
                raw = await self._client.request(method, full_url, **kwargs)
            else:
                async with httpx.AsyncClient() as client:
                    raw = await client.request(method, full_url, **kwargs)
        except httpx.HTTPError as exc:
            logger.debug("request failed: %s %s (%r)", method, full_url, exc)
            raise TransportError(None, exc) from exc

        response = TransportResponse(
            status=raw.status_code,
            payload=_decode(raw, opts.get("response_type", "json")),
            url=full_url,
            headers=dict(raw.headers),
        )
        if not response.ok:
            raise TransportError(response)
        return response

    def _resolve_url(self, url: str) -> str:
        if self._base_url and not url.startswith(("http://", "https://")):
            return f"{self._base_url}/{url.lstrip('/')}"
        return url

    def _request_kwargs(self, opts: Mapping[str, Any]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "headers": dict(opts.get("headers") or {}),
            "timeout": opts.get("timeout", self._timeout),
        }
        if opts.get("user"):
            kwargs["auth"] = httpx.BasicAuth(opts["user"], opts.get("password") or "")
        data = opts.get("data")
        if isinstance(data, (dict, list)):
            kwargs["json"] = data
        elif isinstance(data, (str, bytes)):
            kwargs["content"] = data
        return kwargs


def _decode(raw: httpx.Response, response_type: str) -> Any:
    if response_type == "json":
        try:
            return raw.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
    return raw.text
