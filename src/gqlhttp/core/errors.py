"""
Custom exceptions for the gqlhttp pipeline.

Every failure raised while handling a request ends up in one of two shapes:

- ProtocolError: carries an explicit HTTP status and an ordered list of
  errors that are returned to the client verbatim.
- GenericError: wraps any other exception; reported as a 500.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union


class GQLHttpError(Exception):
    """Base exception for all gqlhttp errors."""
    pass


class ProtocolError(GQLHttpError):
    """
    Status-tagged failure that short-circuits the pipeline.

    The errors are caller-constructed and skip the user error formatter.
    """

    def __init__(
        self,
        status: int,
        errors: Sequence[Any],
        headers: Optional[Mapping[str, str]] = None,
    ):
        if not errors:
            raise ValueError("ProtocolError requires at least one error")
        self.status = status
        self.errors = list(errors)
        self.headers = dict(headers or {})
        super().__init__(f"HTTP {status}: {self.errors}")


class BodyError(ProtocolError):
    """Raised when the request body cannot be read or parsed."""

    def __init__(self, status: int, message: str):
        self.message = message
        super().__init__(status, [{"message": message}])


class GraphQLOptionsError(GQLHttpError):
    """Raised when the endpoint is misconfigured."""
    pass


@dataclass(frozen=True)
class GenericError:
    """Any failure that is not a ProtocolError."""
    cause: BaseException


Failure = Union[ProtocolError, GenericError]


def graphql_error(status: int, errors: Sequence[Any], **headers: str) -> ProtocolError:
    """Build a ProtocolError, e.g. ``graphql_error(400, ["Must provide query string."])``."""
    return ProtocolError(status, errors, headers or None)


def as_failure(error: BaseException) -> Failure:
    """Classify an exception into one of the two failure variants."""
    if isinstance(error, ProtocolError):
        return error
    return GenericError(cause=error)
