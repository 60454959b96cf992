"""
Framework-neutral view of an incoming HTTP request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Mapping, Optional

from starlette.requests import Request


StreamFactory = Callable[[], AsyncIterator[bytes]]


@dataclass(frozen=True)
class RawRequest:
    """
    Headers, an optional pre-parsed body and a lazily readable byte stream.

    Header names are looked up lower-cased. ``body`` is whatever an upstream
    middleware already produced (absent, a mapping, or a string).
    """
    headers: Mapping[str, str]
    body: Any = None
    stream: Optional[StreamFactory] = None

    @classmethod
    def from_starlette(cls, request: Request) -> "RawRequest":
        """
        Wrap a Starlette request.

        A middleware that already parsed the body can leave it on
        ``request.state.parsed_body``.
        """
        return cls(
            headers=request.headers,
            body=getattr(request.state, "parsed_body", None),
            stream=request.stream,
        )

    @classmethod
    def from_bytes(
        cls,
        headers: Mapping[str, str],
        data: bytes,
        body: Any = None,
    ) -> "RawRequest":
        """Build a request whose stream yields ``data`` in one chunk."""

        async def stream() -> AsyncIterator[bytes]:
            yield data

        return cls(
            headers={name.lower(): value for name, value in headers.items()},
            body=body,
            stream=stream,
        )
