"""
HAL Resource Representation
===========================

A hypermedia document split into plain properties, named links and
embedded sub-resources.

Wire shape (application/hal+json):

    {
        "name": "Thomas",
        "_links": {
            "self": {"href": "/users/thomas"},
            "items": {"href": "/users/thomas/items{?page}", "templated": true}
        },
        "_embedded": {"items": [{...}, {...}]}
    }
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import MalformedResourceError

logger = logging.getLogger(__name__)

LINKS_KEY = "_links"
EMBEDDED_KEY = "_embedded"


class LinkDescriptor(BaseModel):
    """A single HAL link. Extra attributes (title, name, type...) are kept."""
    model_config = ConfigDict(frozen=True, extra="allow")

    href: str
    templated: bool = False


@dataclass
class Resource:
    """
    Properties, links and embedded resources of one response body.

    Lookups never raise: a missing property, link or embedded resource
    is reported as None. A Resource is treated as read-only once it has
    been attached to a Navigator.
    """
    properties: Dict[str, Any] = field(default_factory=dict)
    links: Dict[str, LinkDescriptor] = field(default_factory=dict)
    embedded: Dict[str, Union["Resource", List["Resource"]]] = field(default_factory=dict)

    # =========================================
    # LOOKUPS
    # =========================================

    def get_property(self, name: str) -> Any:
        return self.properties.get(name)

    def get_link(self, relation: str) -> Optional[LinkDescriptor]:
        return self.links.get(relation)

    def get_href(self, relation: str) -> Optional[str]:
        link = self.links.get(relation)
        return link.href if link else None

    def get_embedded(self, relation: str) -> Optional[Union["Resource", List["Resource"]]]:
        return self.embedded.get(relation)

    # =========================================
    # BUILDERS
    # =========================================

    def add_property(self, name: str, value: Any) -> "Resource":
        self.properties[name] = value
        return self

    def add_link(self, relation: str, href: str, templated: bool = False, **attributes: Any) -> "Resource":
        """Add (or replace) the link for a relation."""
        self.links[relation] = LinkDescriptor(href=href, templated=templated, **attributes)
        return self

    def add_embedded(self, relation: str, resource: Union["Resource", List["Resource"]]) -> "Resource":
        self.embedded[relation] = resource
        return self

    # =========================================
    # WIRE FORMAT
    # =========================================

    @classmethod
    def from_raw(cls, body: Any) -> "Resource":
        """
        Build a Resource from a decoded response body.

        Args:
            body: Decoded JSON body

        Returns:
            New Resource

        Raises:
            MalformedResourceError: If body is not a mapping
        """
        if not isinstance(body, Mapping):
            raise MalformedResourceError(
                f"Expected a keyed resource body, got {type(body).__name__}",
                {"body_type": type(body).__name__},
            )

        resource = cls()
        for key, value in body.items():
            if key == LINKS_KEY:
                resource._load_links(value)
            elif key == EMBEDDED_KEY:
                resource._load_embedded(value)
            else:
                resource.add_property(key, value)
        return resource

    def to_raw(self) -> Dict[str, Any]:
        """Render back to the wire shape accepted by from_raw()."""
        raw = dict(self.properties)
        if self.links:
            raw[LINKS_KEY] = {
                relation: link.model_dump(exclude_defaults=True)
                for relation, link in self.links.items()
            }
        if self.embedded:
            raw[EMBEDDED_KEY] = {
                relation: [r.to_raw() for r in value] if isinstance(value, list) else value.to_raw()
                for relation, value in self.embedded.items()
            }
        return raw

    def _load_links(self, links: Any) -> None:
        if not isinstance(links, Mapping):
            logger.warning(f"Ignoring {LINKS_KEY} section of type {type(links).__name__}")
            return

        for relation, entry in links.items():
            # HAL allows an array of links per relation; only the first is navigable
            if isinstance(entry, list):
                if not entry:
                    continue
                entry = entry[0]
            try:
                self.links[relation] = LinkDescriptor.model_validate(entry)
            except ValidationError as e:
                logger.warning(f"Skipping invalid link '{relation}': {e.error_count()} error(s)")

    def _load_embedded(self, embedded: Any) -> None:
        if not isinstance(embedded, Mapping):
            logger.warning(f"Ignoring {EMBEDDED_KEY} section of type {type(embedded).__name__}")
            return

        for relation, entry in embedded.items():
            if isinstance(entry, list):
                items = []
                for index, item in enumerate(entry):
                    if isinstance(item, Mapping):
                        items.append(Resource.from_raw(item))
                    else:
                        logger.warning(
                            f"Skipping embedded '{relation}'[{index}] of type {type(item).__name__}"
                        )
                self.embedded[relation] = items
            elif isinstance(entry, Mapping):
                self.embedded[relation] = Resource.from_raw(entry)
            else:
                logger.warning(f"Skipping embedded '{relation}' of type {type(entry).__name__}")
