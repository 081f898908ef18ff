from __future__ import annotations

import re

from pydantic import BaseModel, field_validator

_IDENTIFIER_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


def _validate_identifier(v: str, field_name: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field_name} must not be empty")
    if len(v) > 100:
        raise ValueError(f"{field_name} must not exceed 100 characters")
    if not _IDENTIFIER_RE.match(v):
        raise ValueError(f"Invalid {field_name}: {v!r}")
    return v


class ListComponentsInput(BaseModel):
    category: str | None = None

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return _validate_identifier(v, "category")


class ComponentDocsInput(BaseModel):
    """Arguments shared by the overview, develop and guidelines tools."""

    component: str
    category: str | None = None

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str) -> str:
        return _validate_identifier(v, "component")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return _validate_identifier(v, "category")
