"""MCP server for mittwald flow component documentation."""

from __future__ import annotations

__version__ = "0.1.0"
