from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PropertyInfo(BaseModel):
    """One row of a rendered property, event or accessibility table."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = ""
    default: str = ""
    required: bool = False  # not detectable from the rendered tables
    description: str = ""


class PropertiesSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    heading: str
    properties: tuple[PropertyInfo, ...] = ()


class DevelopData(BaseModel):
    """Scraped property tables for one component; zero sections is valid."""

    model_config = ConfigDict(frozen=True)

    sections: tuple[PropertiesSection, ...] = ()
