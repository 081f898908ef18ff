from __future__ import annotations

from flowdocs.models.cache import CacheEntry
from flowdocs.models.develop import DevelopData, PropertiesSection, PropertyInfo
from flowdocs.models.registry import (
    ComponentInfo,
    ComponentRegistry,
    ResolvedComponent,
    TreeEntry,
    TreeListing,
)
from flowdocs.models.tools import ComponentDocsInput, ListComponentsInput

__all__ = [
    # registry
    "TreeEntry",
    "TreeListing",
    "ComponentInfo",
    "ComponentRegistry",
    "ResolvedComponent",
    # develop
    "PropertyInfo",
    "PropertiesSection",
    "DevelopData",
    # cache
    "CacheEntry",
    # tools
    "ListComponentsInput",
    "ComponentDocsInput",
]
