"""
HAL Navigator
=============

Client for hypermedia (HAL) APIs.

This package provides:
- Discovery of an API entry point
- Link following with RFC 6570 URI templates
- Resource creation with automatic 201 Location following
- Resumable navigation from a captured (location, resource) pair
"""

__version__ = "0.1.0"

from .config import NavigatorConfig, TransportConfig
from .errors import (
    NavigatorError,
    LinkNotFoundError,
    TemplateExpansionError,
    MalformedResourceError,
    MissingLocationError,
)
from .links import ResolvedLink, resolve_link, make_absolute
from .navigator import Navigator, NavigatorOptions, NavigatorState
from .resource import Resource, LinkDescriptor
from .transport import BaseTransport, HttpxTransport, TransportResponse

__all__ = [
    "Navigator",
    "NavigatorOptions",
    "NavigatorState",
    "NavigatorConfig",
    "TransportConfig",
    "Resource",
    "LinkDescriptor",
    "ResolvedLink",
    "resolve_link",
    "make_absolute",
    "BaseTransport",
    "HttpxTransport",
    "TransportResponse",
    "NavigatorError",
    "LinkNotFoundError",
    "TemplateExpansionError",
    "MalformedResourceError",
    "MissingLocationError",
]
