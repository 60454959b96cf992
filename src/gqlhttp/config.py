"""
Configuration loading for gqlhttp servers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .core.body import DEFAULT_BODY_LIMIT


CONFIG_ENV_VAR = "GQLHTTP_CONFIG"
DEFAULT_CONFIG_PATH = "gqlhttp.yaml"


@dataclass
class ServerConfig:
    """Settings of a GraphQL server."""
    host: str = "127.0.0.1"
    port: int = 8000
    path: str = "/graphql"
    graphiql: bool = True
    pretty: bool = False
    body_limit: int = DEFAULT_BODY_LIMIT
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"])
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerConfig":
        """Create config from dictionary; missing keys keep their defaults."""
        defaults = cls()
        server = data.get("server", {})
        graphql = data.get("graphql", {})
        return cls(
            host=server.get("host", defaults.host),
            port=int(server.get("port", defaults.port)),
            path=graphql.get("path", defaults.path),
            graphiql=bool(graphql.get("graphiql", defaults.graphiql)),
            pretty=bool(graphql.get("pretty", defaults.pretty)),
            body_limit=int(graphql.get("body_limit", defaults.body_limit)),
            cors_origins=list(server.get("cors_origins", defaults.cors_origins)),
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for YAML serialization."""
        return {
            "server": {
                "host": self.host,
                "port": self.port,
                "cors_origins": self.cors_origins,
            },
            "graphql": {
                "path": self.path,
                "graphiql": self.graphiql,
                "pretty": self.pretty,
                "body_limit": self.body_limit,
            },
            "log_level": self.log_level,
        }

    def save(self, path: Path | str = DEFAULT_CONFIG_PATH) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        content = yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        path.write_text(content)


def default_config_path() -> Path:
    """Config path from $GQLHTTP_CONFIG, else ./gqlhttp.yaml."""
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))


def load_config(path: Optional[Path | str] = None) -> ServerConfig | None:
    """Load configuration from YAML file."""
    path = Path(path) if path is not None else default_config_path()
    if not path.exists():
        return None

    data = yaml.safe_load(path.read_text()) or {}
    return ServerConfig.from_dict(data)
