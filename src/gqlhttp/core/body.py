"""
Body resolver - extracts a GraphQL payload from a request body.

Supported content types:

1. application/json:
   {"query": "{ hello }", "variables": {...}, "operationName": "..."}

2. application/x-www-form-urlencoded:
   query=%7B+hello+%7D&operationName=Hello

3. application/graphql:
   { hello }                        -> {"query": "{ hello }"}

4. multipart/form-data:
   one form field per payload key

Any other content type yields an empty payload.
"""

from __future__ import annotations

import codecs
import json
import logging
import zlib
from enum import Enum
from typing import Any, Callable, Mapping
from urllib.parse import parse_qsl

from starlette.datastructures import Headers
from starlette.formparsers import MultiPartException, MultiPartParser

from .content_type import ContentTypeInfo
from .errors import BodyError
from .request import RawRequest

logger = logging.getLogger(__name__)


Payload = dict[str, Any]

# 100 KiB
DEFAULT_BODY_LIMIT = 100 * 1024


class BodyStrategy(Enum):
    """How a request body is turned into a payload."""
    JSON = "json"
    FORM = "form"
    GRAPHQL = "graphql"
    MULTIPART = "multipart"
    NONE = "none"


STRATEGIES: dict[str, BodyStrategy] = {
    "application/json": BodyStrategy.JSON,
    "application/x-www-form-urlencoded": BodyStrategy.FORM,
    "application/graphql": BodyStrategy.GRAPHQL,
    "multipart/form-data": BodyStrategy.MULTIPART,
}


def select_strategy(type_info: ContentTypeInfo) -> BodyStrategy:
    """Pick the body strategy for a content type; parameters are ignored."""
    return STRATEGIES.get(type_info.type.lower(), BodyStrategy.NONE)


# =============================================================================
# Text strategies
# =============================================================================


def parse_json(text: str) -> Payload:
    """Parse a JSON object body."""
    try:
        data = json.loads(text)
    except ValueError as e:
        raise BodyError(400, "POST body sent invalid JSON.") from e

    if not isinstance(data, dict):
        raise BodyError(400, "POST body sent invalid JSON.")

    return data


def parse_urlencoded(text: str) -> Payload:
    """
    Parse a form-encoded body; for repeated keys the last value wins.

    Bare keys (``&raw``) map to an empty string. Only percent-escapes that
    do not decode are rejected.
    """
    if not text.strip():
        return {}

    try:
        pairs = parse_qsl(text, keep_blank_values=True, errors="strict")
    except ValueError as e:
        raise BodyError(400, "POST body sent invalid form data.") from e

    return dict(pairs)


def parse_graphql(text: str) -> Payload:
    """The whole body is the query document."""
    return {"query": text}


TEXT_PARSERS: dict[BodyStrategy, Callable[[str], Payload]] = {
    BodyStrategy.JSON: parse_json,
    BodyStrategy.FORM: parse_urlencoded,
    BodyStrategy.GRAPHQL: parse_graphql,
}


async def parse_multipart(data: bytes, content_type: str) -> Payload:
    """
    Parse a multipart/form-data body into its text fields.

    File parts are not part of a GraphQL payload and are dropped.
    """

    async def stream():
        yield data

    parser = MultiPartParser(Headers({"content-type": content_type}), stream())
    try:
        form = await parser.parse()
    except (MultiPartException, ValueError) as e:
        raise BodyError(400, "POST body sent invalid multipart data.") from e

    try:
        return {key: value for key, value in form.multi_items() if isinstance(value, str)}
    finally:
        await form.close()


# =============================================================================
# Stream reading
# =============================================================================


def _decompressor(encoding: str):
    if encoding == "identity":
        return None
    if encoding == "gzip":
        return zlib.decompressobj(16 + zlib.MAX_WBITS)
    if encoding == "deflate":
        return zlib.decompressobj()
    raise BodyError(415, f'Unsupported content-encoding "{encoding}".')


def check_charset(charset: str) -> None:
    """Raise a 415 BodyError if Python has no codec for ``charset``."""
    try:
        codecs.lookup(charset)
    except LookupError as e:
        raise BodyError(415, f'Unsupported charset "{charset.upper()}".') from e


async def read_body(request: RawRequest, *, limit: int = DEFAULT_BODY_LIMIT) -> bytes:
    """
    Read the full request stream.

    Handles gzip/deflate Content-Encoding and enforces ``limit`` on the
    decoded size.
    """
    if request.stream is None:
        raise BodyError(400, "Invalid body: request stream is not readable.")

    encoding = request.headers.get("content-encoding", "identity").strip().lower()
    decompressor = _decompressor(encoding)

    chunks: list[bytes] = []
    size = 0

    try:
        async for chunk in request.stream():
            if decompressor is not None:
                chunk = decompressor.decompress(chunk)
            size += len(chunk)
            if size > limit:
                raise BodyError(413, "Request entity too large.")
            chunks.append(chunk)

        if decompressor is not None:
            tail = decompressor.flush()
            size += len(tail)
            if size > limit:
                raise BodyError(413, "Request entity too large.")
            chunks.append(tail)
    except BodyError:
        raise
    except Exception as e:
        raise BodyError(400, f"Invalid body: {e}.") from e

    return b"".join(chunks)


def decode_body(data: bytes, charset: str) -> str:
    try:
        return data.decode(charset)
    except UnicodeDecodeError as e:
        raise BodyError(400, f"Invalid body: {e}.") from e


# =============================================================================
# Entry point
# =============================================================================


async def resolve_body(request: RawRequest, *, limit: int = DEFAULT_BODY_LIMIT) -> Payload:
    """
    Resolve the GraphQL payload carried by a request body.

    Args:
        request: Request headers, pre-parsed body and byte stream
        limit: Maximum decoded body size in bytes

    Returns:
        Payload dict (possibly empty)

    Raises:
        BodyError: If the body cannot be read, decoded or parsed
    """
    body = request.body

    # Already parsed into a mapping upstream; other structures fall to {} below
    if isinstance(body, Mapping):
        return body

    # A query may still arrive through the query string
    header = request.headers.get("content-type")
    if header is None:
        return {}

    type_info = ContentTypeInfo.parse(header)
    strategy = select_strategy(type_info)
    logger.debug(f"Content-Type {type_info.type!r} -> {strategy.value} body strategy")

    if isinstance(body, str) and strategy is BodyStrategy.GRAPHQL:
        return parse_graphql(body)

    # Unrecognized pre-parsed body or content type: parse nothing
    if body is not None or strategy is BodyStrategy.NONE:
        return {}

    charset = type_info.charset
    check_charset(charset)

    data = await read_body(request, limit=limit)

    if strategy is BodyStrategy.MULTIPART:
        return await parse_multipart(data, header)

    return TEXT_PARSERS[strategy](decode_body(data, charset))
