"""
HAL Navigator Errors
====================

Exception hierarchy raised by the navigation engine.

Transport failures (httpx.HTTPError and friends) are never wrapped here;
they reach the caller exactly as the transport raised them.
"""

from typing import Any, Dict, Optional


class NavigatorError(Exception):
    """Base exception for navigation errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class LinkNotFoundError(NavigatorError):
    """The current resource has no link for the requested relation."""
    def __init__(self, relation: str):
        self.relation = relation
        super().__init__(
            f"Attempting to follow the link '{relation}', which does not exist",
            {"relation": relation},
        )


class TemplateExpansionError(NavigatorError):
    """A link href could not be parsed or expanded as a URI template."""
    def __init__(self, template: str, reason: str):
        self.template = template
        super().__init__(
            f"Cannot expand URI template '{template}': {reason}",
            {"template": template},
        )


class MalformedResourceError(NavigatorError):
    """A response body is not a keyed (mapping) structure."""
    pass


class MissingLocationError(NavigatorError):
    """A redirect was requested but the last response carried no Location header."""
    def __init__(self, location: Optional[str]):
        super().__init__(
            f"No Location header on the response from {location}",
            {"location": location},
        )
