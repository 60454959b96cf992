"""
Content-Type header parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from python_multipart.multipart import parse_options_header


DEFAULT_CHARSET = "utf-8"


@dataclass(frozen=True)
class ContentTypeInfo:
    """Parsed ``Content-Type`` header: lower-cased type plus its parameters."""
    type: str
    parameters: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, header: str) -> "ContentTypeInfo":
        """
        Parse a Content-Type header value.

        Examples:
            application/json -> ContentTypeInfo("application/json", {})
            Text/Plain; Charset=UTF-8 -> ContentTypeInfo("text/plain", {"charset": "UTF-8"})
        """
        ctype, options = parse_options_header(header)
        return cls(
            type=ctype.decode("latin-1").strip().lower(),
            parameters={
                key.decode("latin-1").lower(): value.decode("latin-1")
                for key, value in options.items()
            },
        )

    @property
    def charset(self) -> str:
        return (self.parameters.get("charset") or DEFAULT_CHARSET).lower()

    @property
    def boundary(self) -> str | None:
        return self.parameters.get("boundary")
