"""
Result/error normalizer - builds the GraphQL response envelope.

Every envelope is JSON-shaped:
    {"data": ..., "errors": [...], "extensions": {...}}   (execution result)
    {"errors": [...]}                                      (failure)

The HTTP status is set on the response channel as a side effect.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping, Optional, Protocol

from graphql import ExecutionResult, GraphQLError

from ..core.errors import GenericError, ProtocolError, as_failure
from .context import FormatErrorFn

logger = logging.getLogger(__name__)


class StatusChannel(Protocol):
    status_code: int
    headers: MutableMapping[str, str]


@dataclass
class ResponseChannel:
    """Status and extra headers collected while handling one request."""
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)


def default_format_error(error: Any) -> Any:
    """
    Reduce an error to its JSON shape.

    GraphQLError -> its ``formatted`` dict; mappings are already
    formatted; anything else becomes ``{"message": str(error)}``.
    """
    if isinstance(error, GraphQLError):
        return error.formatted
    if isinstance(error, Mapping):
        return error
    return {"message": str(error)}


def handle_result(
    response: StatusChannel,
    result: ExecutionResult,
    format_error: Optional[FormatErrorFn] = None,
) -> dict[str, Any]:
    """
    Build the envelope for an execution result.

    No data means the operation failed at runtime: the status becomes 500
    while the errors still travel in the body. Otherwise the status set by
    the caller is kept, errors or not (partial success).
    """
    # http://spec.graphql.org/October2021/#sec-Data
    if result.data is None:
        response.status_code = 500

    envelope: dict[str, Any] = {"data": result.data}

    if result.errors:
        formatter = format_error or default_format_error
        envelope["errors"] = [formatter(error) for error in result.errors]

    if result.extensions is not None:
        envelope["extensions"] = result.extensions

    return envelope


def _protocol_item(error: Any) -> Any:
    # Caller-built strings and dicts pass verbatim; exceptions are reduced
    # to their message so nothing unserializable leaves the server.
    if isinstance(error, BaseException):
        return default_format_error(error)
    return error


def handle_error(response: StatusChannel, error: BaseException) -> dict[str, Any]:
    """
    Build the envelope for a failure.

    ProtocolError keeps its status, errors and headers. Anything else is
    reported as a 500 with the error's message.
    """
    match as_failure(error):
        case ProtocolError(status=status, errors=errors, headers=headers):
            response.status_code = status
            for name, value in headers.items():
                response.headers[name] = value
            return {"errors": [_protocol_item(item) for item in errors]}

        case GenericError(cause=cause):
            logger.error(f"Unhandled error while processing GraphQL request: {cause!r}", exc_info=cause)
            response.status_code = 500
            return {"errors": [default_format_error(cause)]}
