"""
Runtime module - execution and response normalization.
"""

from __future__ import annotations

from .context import ExecuteFn, ExtensionContext, ExtensionsFn, FormatErrorFn
from .executor import execute_document
from .response import (
    ResponseChannel,
    StatusChannel,
    default_format_error,
    handle_error,
    handle_result,
)

__all__ = [
    "ExecuteFn",
    "ExtensionContext",
    "ExtensionsFn",
    "FormatErrorFn",
    "execute_document",
    "ResponseChannel",
    "StatusChannel",
    "default_format_error",
    "handle_error",
    "handle_result",
]
