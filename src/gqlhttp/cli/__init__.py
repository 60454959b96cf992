"""
gqlhttp CLI - Command line tools for serving a schema.
"""

from __future__ import annotations

from .main import main, app

__all__ = ["main", "app"]
