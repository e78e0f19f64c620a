"""Server configuration."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from ..services.guide import DEFAULT_GUIDE_PATH, DEFAULT_GUIDE_TITLE

DEFAULT_CONFIG_PATH = "~/.risk-config/config.yaml"


@dataclass
class ServerConfig:
    """HTTP server configuration."""
    host: str = "127.0.0.1"
    port: int = 3000
    max_body_bytes: int = 10 * 1024 * 1024  # 10 MiB
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self):
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        if self.max_body_bytes <= 0:
            raise ValueError("max_body_bytes must be positive")


@dataclass
class GuideConfig:
    """Risk assessment guide configuration."""
    path: str = str(DEFAULT_GUIDE_PATH)
    title: str = DEFAULT_GUIDE_TITLE

    def __post_init__(self):
        # Expand home directory
        self.path = str(Path(self.path).expanduser())


@dataclass
class RiskConfigServiceConfig:
    """Full service configuration."""
    server: ServerConfig = field(default_factory=ServerConfig)
    guide: GuideConfig = field(default_factory=GuideConfig)

    @classmethod
    def from_file(cls, path: str | Path) -> "RiskConfigServiceConfig":
        """Load configuration from YAML file."""
        path = Path(path).expanduser()
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "RiskConfigServiceConfig":
        """Create configuration from dictionary."""
        server_data = data.get("server") or {}
        guide_data = data.get("guide") or {}

        return cls(
            server=ServerConfig(**server_data) if server_data else ServerConfig(),
            guide=GuideConfig(**guide_data) if guide_data else GuideConfig(),
        )

    @classmethod
    def from_env(cls) -> "RiskConfigServiceConfig":
        """Create configuration from environment variables.

        ``RISK_CONFIG_CONFIG`` points at the YAML file; ``PORT`` overrides
        the configured port.
        """
        config_path = os.environ.get("RISK_CONFIG_CONFIG", DEFAULT_CONFIG_PATH)
        config = cls.from_file(config_path)

        port = os.environ.get("PORT")
        if port:
            config.server = ServerConfig(
                host=config.server.host,
                port=int(port),
                max_body_bytes=config.server.max_body_bytes,
                cors_origins=config.server.cors_origins,
            )
        return config

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if not self.server.host:
            errors.append("server.host is required")
        if not self.server.cors_origins:
            errors.append("server.cors_origins must list at least one origin")
        if not self.guide.title:
            errors.append("guide.title is required")

        return errors
