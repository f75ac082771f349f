"""
Server configuration module.

This module handles server-side configuration settings.
"""

from typing import Optional

from relay_common.constants import (
    DEFAULT_SERVER_HOST, MIN_PORT, MAX_PORT, MAX_CONNECTIONS, MAX_LINE_BYTES, LOG_DIR
)


class ConfigError(ValueError):
    """Raised when a configuration value is out of range or missing."""


class ServerConfig:
    """Server configuration class."""

    def __init__(self, port: int, credentials_path: str, host: str = DEFAULT_SERVER_HOST,
                 max_connections: int = MAX_CONNECTIONS, max_line_bytes: int = MAX_LINE_BYTES,
                 logs_dir: Optional[str] = LOG_DIR):
        self.host = host
        self.port = port
        self.credentials_path = credentials_path

        # Worker pool size
        self.max_connections = max_connections

        # Longest line read from a client
        self.max_line_bytes = max_line_bytes

        # Logging configuration
        self.logs_dir = logs_dir

    def validate(self) -> 'ServerConfig':
        """Check every setting, raising ConfigError on the first bad one."""
        # bool is an int subclass but never a port
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ConfigError(f"Invalid port: {self.port!r}")
        if not MIN_PORT <= self.port <= MAX_PORT:
            raise ConfigError(f"Invalid port: {self.port} (must be {MIN_PORT}-{MAX_PORT})")
        if not self.credentials_path:
            raise ConfigError("Missing credentials file")
        if self.max_connections < 1:
            raise ConfigError(f"max_connections must be positive, got {self.max_connections}")
        if self.max_line_bytes < 1:
            raise ConfigError(f"max_line_bytes must be positive, got {self.max_line_bytes}")
        return self


def parse_port(value: str) -> int:
    """Convert a command-line port argument, raising ConfigError when invalid."""
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid port: {value}") from None
    if not MIN_PORT <= port <= MAX_PORT:
        raise ConfigError(f"Invalid port: {value}")
    return port
