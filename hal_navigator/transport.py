"""
HAL Navigator Transport
=======================

The Navigator never talks HTTP itself. It calls a pair of coroutines:

    get(url, params, config)  -> TransportResponse
    post(url, body, config)   -> TransportResponse

`config` is an opaque bag that only the transport interprets. HttpxTransport
is the default binding on top of httpx.AsyncClient.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

import httpx

from .config import TransportConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Outcome of one request as seen by the Navigator."""
    status: int
    body: Any
    location: str
    response: Any  # raw transport response, used for header lookups


GetFn = Callable[[str, Mapping[str, Any], Mapping[str, Any]], Awaitable[TransportResponse]]
PostFn = Callable[[str, Any, Mapping[str, Any]], Awaitable[TransportResponse]]


class BaseTransport(ABC):
    @abstractmethod
    async def get(
        self, url: str, params: Optional[Mapping[str, Any]] = None, config: Optional[Mapping[str, Any]] = None
    ) -> TransportResponse:
        """Issue a GET for url with extra query params."""
        ...

    @abstractmethod
    async def post(
        self, url: str, body: Any = None, config: Optional[Mapping[str, Any]] = None
    ) -> TransportResponse:
        """Issue a POST for url carrying body."""
        ...


class HttpxTransport(BaseTransport):
    """
    Transport over httpx.AsyncClient.

    If no client is injected, a short-lived client is opened per request.
    Status codes are reported, not raised, unless raise_for_status is set.
    """

    ALLOWED_CONFIG_KEYS = frozenset({"headers", "cookies", "auth", "timeout"})

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        config: Optional[TransportConfig] = None,
        raise_for_status: bool = False,
    ):
        self.client = client
        self.config = config or TransportConfig()
        self.raise_for_status = raise_for_status

    async def get(
        self, url: str, params: Optional[Mapping[str, Any]] = None, config: Optional[Mapping[str, Any]] = None
    ) -> TransportResponse:
        return await self._request("GET", merge_query(url, params), config=config)

    async def post(
        self, url: str, body: Any = None, config: Optional[Mapping[str, Any]] = None
    ) -> TransportResponse:
        return await self._request("POST", url, json=body, config=config)

    async def _request(self, method: str, url: str, config: Optional[Mapping[str, Any]] = None, **kwargs) -> TransportResponse:
        kwargs.update(self._request_options(config))

        if self.client is not None:
            response = await self.client.request(method, url, **kwargs)
        else:
            async with httpx.AsyncClient(timeout=self.config.timeout, verify=self.config.verify) as client:
                response = await client.request(method, url, **kwargs)

        logger.debug(f"{method} {url} -> {response.status_code}")
        if self.raise_for_status:
            response.raise_for_status()

        return TransportResponse(
            status=response.status_code,
            body=decode_body(response),
            location=str(response.url),
            response=response,
        )

    def _request_options(self, config: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Translate the opaque config bag into httpx request kwargs."""
        config = config or {}
        unexpected = set(config) - self.ALLOWED_CONFIG_KEYS
        if unexpected:
            raise TypeError(f"Unexpected transport option(s): {sorted(unexpected)}")

        options: Dict[str, Any] = {k: v for k, v in config.items() if k != "headers"}
        options["headers"] = {**self.config.headers, **(config.get("headers") or {})}
        options["follow_redirects"] = False
        return options


def merge_query(url: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Add params to the query already in url; httpx's params= would replace it."""
    if not params:
        return url
    return str(httpx.URL(url).copy_merge_params(dict(params)))


def decode_body(response: httpx.Response) -> Any:
    """Empty body -> {}, JSON -> decoded value, anything else -> raw text."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text
