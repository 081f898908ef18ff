from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict


class TreeEntry(BaseModel):
    """Single entry of a recursive git tree listing."""

    path: str
    type: str  # "blob" | "tree" | "commit"


class TreeListing(BaseModel):
    """Recursive tree listing response; other response fields are ignored."""

    tree: list[TreeEntry]
    truncated: bool = False


class ComponentInfo(BaseModel):
    """One documented component."""

    model_config = ConfigDict(frozen=True)

    slug: str
    name: str
    description: str = ""
    category: str


class ResolvedComponent(BaseModel):
    """Definitive location of a component's documentation."""

    model_config = ConfigDict(frozen=True)

    category: str
    slug: str


@dataclass(frozen=True)
class ComponentRegistry:
    """In-memory index built from the repository tree and component frontmatter.

    Built in one pass and cached as a unit; never updated in place.
    """

    # tree order
    components: tuple[ComponentInfo, ...] = ()

    # slug → component
    by_slug: dict[str, ComponentInfo] = field(default_factory=dict)
