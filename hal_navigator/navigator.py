"""
HAL Navigator
=============

Stateful-looking, immutable navigation over a hypermedia API.

    nav = await Navigator.discover("https://api.example.com")
    nav = await nav.post("users", {"name": "Thomas"})
    nav.status                          # 200, after following the 201 Location
    nav.resource.get_property("name")   # "Thomas"

Every navigation returns a new Navigator holding the location, status,
parsed resource and raw response of the request it made. The Navigator it
was called on is left exactly as it was, so a failed request never leaves a
half-updated state behind and branching a navigation is just keeping a
reference to an earlier Navigator.
"""

import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional

import httpx

from .errors import LinkNotFoundError, MissingLocationError
from .links import ResolvedLink, make_absolute, resolve_link
from .resource import Resource
from .transport import GetFn, HttpxTransport, PostFn, TransportResponse, merge_query

logger = logging.getLogger(__name__)

REDIRECT_STATUS = 201


@dataclass(frozen=True)
class NavigatorOptions:
    """
    Options fixed when a navigation starts.

    Attributes:
        get: Transport GET coroutine (defaults to HttpxTransport().get)
        post: Transport POST coroutine (defaults to HttpxTransport().post)
        follow_redirects: GET the Location of a 201 POST response automatically
        http: Transport config for the discovery request
    """
    get: Optional[GetFn] = None
    post: Optional[PostFn] = None
    follow_redirects: bool = True
    http: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.get is None or self.post is None:
            transport = HttpxTransport()
            if self.get is None:
                object.__setattr__(self, "get", transport.get)
            if self.post is None:
                object.__setattr__(self, "post", transport.post)

    def with_overrides(self, overrides: Mapping[str, Any]) -> "NavigatorOptions":
        """
        Return new options with overrides applied.

        Raises:
            TypeError: If an override names an unknown option
        """
        if not overrides:
            return self
        unexpected = set(overrides) - {f.name for f in fields(self)}
        if unexpected:
            raise TypeError(f"Unexpected navigator option(s): {sorted(unexpected)}")
        return replace(self, **overrides)


@dataclass(frozen=True)
class NavigatorState:
    """Location, status, resource and raw response of the last request."""
    location: Optional[str] = None
    status: Optional[int] = None
    resource: Optional[Resource] = None
    response: Any = None


class Navigator:
    """Follows links between HAL resources, one request at a time."""

    def __init__(self, options: Optional[NavigatorOptions] = None, state: Optional[NavigatorState] = None):
        self.options = options or NavigatorOptions()
        self._state = state or NavigatorState()

    def __repr__(self) -> str:
        return f"<Navigator {self.location} [{self.status}]>"

    # =========================================
    # ENTRY POINTS
    # =========================================

    @classmethod
    async def discover(cls, url: str, options: Optional[NavigatorOptions] = None, **overrides) -> "Navigator":
        """
        Fetch the API entry point.

        Args:
            url: Absolute URL of the root resource
            options: Base options (defaults to NavigatorOptions())
            **overrides: Option overrides (follow_redirects, get, post, http)

        Returns:
            Navigator located at the root resource
        """
        navigator = cls((options or NavigatorOptions()).with_overrides(overrides))
        return await navigator.get_url(url, {}, navigator.options.http)

    @classmethod
    def resume(
        cls,
        location: str,
        resource: Resource,
        options: Optional[NavigatorOptions] = None,
        **overrides,
    ) -> "Navigator":
        """Continue a navigation from a captured (location, resource) pair without a request."""
        return cls(
            (options or NavigatorOptions()).with_overrides(overrides),
            NavigatorState(location=location, resource=resource),
        )

    # =========================================
    # STATE
    # =========================================

    @property
    def location(self) -> Optional[str]:
        return self._state.location

    @property
    def status(self) -> Optional[int]:
        return self._state.status

    @property
    def resource(self) -> Optional[Resource]:
        return self._state.resource

    @property
    def response(self) -> Any:
        return self._state.response

    @property
    def state(self) -> NavigatorState:
        return self._state

    def get_header(self, name: str) -> Optional[str]:
        """Header of the last response (case-insensitive), or None."""
        headers = getattr(self._state.response, "headers", None)
        if headers is None:
            return None
        if not isinstance(headers, httpx.Headers):
            headers = httpx.Headers(headers)
        return headers.get(name)

    # =========================================
    # NAVIGATION
    # =========================================

    def resolve_link(self, relation: str, params: Optional[Mapping[str, Any]] = None) -> ResolvedLink:
        """
        Work out where following a relation would go, without a request.

        Raises:
            LinkNotFoundError: If the current resource has no such relation
            TemplateExpansionError: If the link template is malformed
        """
        link = self.resource.get_link(relation) if self.resource is not None else None
        if link is None:
            raise LinkNotFoundError(relation)

        href, query_params = resolve_link(link.href, link.templated, params)
        return ResolvedLink(
            href=make_absolute(self.location, href),
            query_params=query_params,
        )

    async def get(
        self,
        relation: str,
        params: Optional[Mapping[str, Any]] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> "Navigator":
        """GET the target of a relation on the current resource."""
        link = self.resolve_link(relation, params)
        logger.debug(f"Following '{relation}' to {link.href}", extra={"relation": relation, "method": "GET"})
        return await self.get_url(link.href, link.query_params, config)

    async def post(
        self,
        relation: str,
        body: Any,
        params: Optional[Mapping[str, Any]] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> "Navigator":
        """POST body to the target of a relation on the current resource."""
        link = self.resolve_link(relation, params)
        logger.debug(f"Posting to '{relation}' at {link.href}", extra={"relation": relation, "method": "POST"})
        return await self.post_url(merge_query(link.href, link.query_params), body, config)

    async def get_url(
        self,
        url: str,
        query_params: Optional[Mapping[str, Any]] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> "Navigator":
        """GET an absolute URL and move there."""
        logger.debug(f"GET {url}", extra={"method": "GET", "location": url})
        result = await self.options.get(url, dict(query_params or {}), dict(config or {}))
        return self._advance(result)

    async def post_url(self, url: str, body: Any, config: Optional[Mapping[str, Any]] = None) -> "Navigator":
        """
        POST to an absolute URL.

        A 201 response is followed to its Location when follow_redirects is
        set, reusing the same config. Any other status is final.
        """
        config = dict(config or {})
        logger.debug(f"POST {url}", extra={"method": "POST", "location": url})
        result = await self.options.post(url, body, config)
        navigator = self._advance(result)

        if self.options.follow_redirects and result.status == REDIRECT_STATUS:
            return await navigator.follow_redirect(config)
        return navigator

    async def follow_redirect(self, config: Optional[Mapping[str, Any]] = None) -> "Navigator":
        """
        GET the Location header of the last response.

        Raises:
            MissingLocationError: If the last response has no Location header
        """
        target = self.get_header("location")
        if not target:
            raise MissingLocationError(self.location)

        url = make_absolute(self.location, target)
        logger.info(f"Following redirect from {self.location} to {url}", extra={"location": url, "status": self.status})
        return await self.get_url(url, {}, config)

    def _advance(self, result: TransportResponse) -> "Navigator":
        # Parse before building the new state so a malformed body commits nothing
        resource = Resource.from_raw(result.body)
        return Navigator(
            self.options,
            NavigatorState(
                location=result.location,
                status=result.status,
                resource=resource,
                response=result.response,
            ),
        )
