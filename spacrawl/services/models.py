"""Data models for crawl results.

All models serialize with camelCase keys so the persisted ``scraped_app.json``
keeps the shape downstream consumers read, and load back losslessly.

Example:
    >>> result = CrawlResult(base_url="https://app.example.com")
    >>> result.model_dump(by_alias=True)
    {'baseUrl': 'https://app.example.com', 'pages': [], 'navigation': [], 'globalStyles': ''}
"""

from __future__ import annotations

import base64

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ComponentNode(_CamelModel):
    """Pruned description of one DOM element.

    Attributes:
        tag: Lower-cased element name
        classes: Class tokens in class-list order
        direct_text: Text of direct child text nodes only (max 200 chars)
        attributes: Allow-listed attributes (data-*, role, aria-label, ...)
        children: Pruned child elements
    """

    tag: str
    classes: list[str] = Field(default_factory=list)
    direct_text: str = ""
    attributes: dict[str, str] = Field(default_factory=dict)
    children: list[ComponentNode] = Field(default_factory=list)

    def count(self) -> int:
        """Number of nodes in this subtree, including self."""
        return 1 + sum(child.count() for child in self.children)


class NavigationMenuItem(_CamelModel):
    """One link from the navigation landmark.

    Attributes:
        label: Trimmed link text
        href: Raw href attribute value (not resolved)
        children: Always empty; landmark links are flattened
    """

    label: str
    href: str
    children: list[NavigationMenuItem] = Field(default_factory=list)


class PageSnapshot(_CamelModel):
    """Structural snapshot of one visited route.

    Attributes:
        url: Route that was loaded
        title: Document title reported by the browser
        markup: Serialized document markup at extraction time
        screenshot: Full-page PNG screenshot, base64 encoded
        component_tree: Pruned top-level children of the body
        discovered_routes: Same-origin routes linked from this page
        visible_text: Body visible text, truncated to 10,000 characters
    """

    url: str
    title: str = ""
    markup: str = ""
    screenshot: str = ""
    component_tree: list[ComponentNode] = Field(default_factory=list)
    discovered_routes: list[str] = Field(default_factory=list)
    visible_text: str = ""

    @property
    def screenshot_bytes(self) -> bytes:
        """Decoded screenshot image."""
        return base64.b64decode(self.screenshot)

    def node_count(self) -> int:
        """Total number of component nodes extracted from the page."""
        return sum(node.count() for node in self.component_tree)


class CrawlResult(_CamelModel):
    """Aggregate document produced by one crawl.

    Attributes:
        base_url: Entry URL the crawl started from
        pages: Snapshots in visitation order, entry page first
        navigation: Flattened navigation menu of the app
        global_styles: Newline-joined :root/html/body CSS rules
    """

    base_url: str
    pages: list[PageSnapshot] = Field(default_factory=list)
    navigation: list[NavigationMenuItem] = Field(default_factory=list)
    global_styles: str = ""

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to the persisted JSON form."""
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, data: str | bytes) -> CrawlResult:
        """Load from the persisted JSON form."""
        return cls.model_validate_json(data)
