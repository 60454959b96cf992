"""
Accept header negotiation and the GraphiQL eligibility check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from .request import RawRequest


# Short names accepted as negotiation candidates
SHORT_TYPES: dict[str, str] = {
    "json": "application/json",
    "html": "text/html",
    "text": "text/plain",
    "xml": "application/xml",
}


class RawFlag(Protocol):
    raw: bool


@dataclass(frozen=True)
class MediaRange:
    """One entry of an Accept header."""
    type: str
    subtype: str
    q: float
    index: int

    @classmethod
    def parse(cls, value: str, index: int) -> Optional["MediaRange"]:
        parts = [p.strip() for p in value.split(";")]
        full_type = parts[0].lower()
        if "/" not in full_type:
            return None

        main, _, sub = full_type.partition("/")
        q = 1.0
        for param in parts[1:]:
            key, _, val = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    q = float(val.strip())
                except ValueError:
                    q = 0.0
        return cls(type=main.strip(), subtype=sub.strip(), q=q, index=index)

    def specificity(self, mime: str) -> int:
        """
        How precisely this range matches ``mime``.

        Returns -1 for no match, 0 for */*, 1 for type/*, 2 for exact.
        """
        main, _, sub = mime.partition("/")
        if self.type == "*" and self.subtype == "*":
            return 0
        if self.type != main:
            return -1
        if self.subtype == "*":
            return 1
        if self.subtype == sub:
            return 2
        return -1


def parse_accept(header: str) -> list[MediaRange]:
    """Split an Accept header into media ranges, dropping malformed ones."""
    ranges = []
    for index, part in enumerate(header.split(",")):
        if not part.strip():
            continue
        media_range = MediaRange.parse(part, index)
        if media_range is not None:
            ranges.append(media_range)
    return ranges


def accepts_types(accept: Optional[str], candidates: Sequence[str]) -> Optional[str]:
    """
    Return the candidate the client prefers, or None if none is acceptable.

    Candidates may be short names ("json", "html") or full MIME types and
    are returned as given. Ranking is by quality, then by how specific the
    matching range is, then by the client's order, then by candidate order.
    A missing Accept header accepts the first candidate.
    """
    if not candidates:
        return None
    if accept is None:
        return candidates[0]

    ranges = parse_accept(accept)
    best: Optional[tuple] = None
    best_candidate: Optional[str] = None

    for position, candidate in enumerate(candidates):
        mime = SHORT_TYPES.get(candidate, candidate).lower()

        # The most specific matching range decides the candidate's quality
        match: Optional[tuple[int, MediaRange]] = None
        for media_range in ranges:
            specificity = media_range.specificity(mime)
            if specificity < 0:
                continue
            if match is None or specificity > match[0]:
                match = (specificity, media_range)

        if match is None or match[1].q <= 0:
            continue

        specificity, media_range = match
        key = (-media_range.q, -specificity, media_range.index, position)
        if best is None or key < best:
            best = key
            best_candidate = candidate

    return best_candidate


def can_display_graphiql(request: RawRequest, params: RawFlag) -> bool:
    """
    Whether GraphiQL may be shown instead of JSON.

    Allowed when the raw mode was not requested and the client prefers HTML
    over JSON.
    """
    if params.raw:
        return False
    return accepts_types(request.headers.get("accept"), ["json", "html"]) == "html"
