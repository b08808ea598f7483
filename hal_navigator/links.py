"""
HAL Link Resolution
===================

Turns a link href plus caller parameters into a concrete reference.

Template variables (RFC 6570, e.g. "/users/{id}", "/users{?admin}") consume
the parameters whose names they declare. Every other parameter is handed
back as a query parameter for the caller to append to the request.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx
from uritemplate import URITemplate

from .errors import TemplateExpansionError


@dataclass(frozen=True)
class ResolvedLink:
    """Absolute target of a link plus the parameters left for the query string."""
    href: str
    query_params: Dict[str, Any] = field(default_factory=dict)


def resolve_link(
    href: str,
    templated: bool,
    params: Optional[Mapping[str, Any]] = None,
) -> Tuple[str, Dict[str, Any]]:
    """
    Expand a link href against caller parameters.

    Args:
        href: Literal reference or URI template
        templated: Whether href is a URI template
        params: Caller-supplied parameters

    Returns:
        (expanded href, parameters not consumed by the template)

    Raises:
        TemplateExpansionError: If the template is malformed or cannot be expanded
    """
    params = dict(params or {})
    if not templated:
        return href, params

    _check_template(href)
    try:
        template = URITemplate(href)
        variables = template.variable_names
        consumed = {k: v for k, v in params.items() if k in variables}
        expanded = template.expand(consumed)
    except (TypeError, ValueError, KeyError) as e:
        raise TemplateExpansionError(href, str(e)) from e

    query_params = {k: v for k, v in params.items() if k not in variables}
    return expanded, query_params


def make_absolute(base: str, reference: str) -> str:
    """Resolve a (possibly relative) reference against an absolute base URI."""
    return str(httpx.URL(base).join(reference))


def _check_template(template: str) -> None:
    """Reject unbalanced or empty template expressions."""
    depth = 0
    start = 0
    for i, char in enumerate(template):
        if char == "{":
            if depth:
                raise TemplateExpansionError(template, f"nested '{{' at position {i}")
            depth = 1
            start = i
        elif char == "}":
            if not depth:
                raise TemplateExpansionError(template, f"unmatched '}}' at position {i}")
            if i == start + 1:
                raise TemplateExpansionError(template, f"empty expression at position {start}")
            depth = 0
    if depth:
        raise TemplateExpansionError(template, f"unterminated expression at position {start}")
