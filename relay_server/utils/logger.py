"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from pathlib import Path
from typing import Optional

from relay_common.constants import LOGGER_NAME, SERVER_LOG_FILE


class ServerLogger:
    """Server logging class."""

    def __init__(self, logs_dir: Optional[str] = None, log_level: int = logging.INFO,
                 name: str = LOGGER_NAME):
        self.logs_dir = Path(logs_dir) if logs_dir else None

        # Set up main logger
        self.logger = logging.getLogger(name)
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
            handler.close()

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Create console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        # Operational log file, only when a directory is configured
        self.server_log_path = None
        if self.logs_dir is not None:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            self.server_log_path = self.logs_dir / SERVER_LOG_FILE
            file_handler = logging.FileHandler(self.server_log_path, encoding='utf-8')
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_listening(self, addr: str):
        self.info(f"Server listening on {addr}")

    def log_connection(self, addr):
        """Log client connection."""
        self.info(f"New connection from {addr}")

    def log_login(self, username: str, addr):
        """Log user login."""
        self.info(f"User '{username}' logged in from {addr}")

    def log_auth_failure(self, addr, reason: str):
        """Log a rejected authentication attempt."""
        self.warning(f"Authentication failed for {addr}: {reason}")

    def log_disconnect(self, username: str, addr):
        """Log user disconnect."""
        self.info(f"User {username} ({addr}) disconnected")

    def log_chat(self, line: str):
        """Log a relayed chat line."""
        self.info(line)

    def log_error(self, operation: str, error: BaseException):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Shared default instance for components that are not handed one
logger = ServerLogger()
