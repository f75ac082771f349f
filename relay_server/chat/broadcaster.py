"""
Chat broadcaster module.

This module fans one chat message out to every registered session.
"""

from typing import Optional

from relay_common.protocol_definitions import create_chat_line
from relay_server.chat.registry import SessionRegistry
from relay_server.utils.logger import ServerLogger, logger as default_logger


class BroadcastEngine:
    """Server-side chat message broadcaster."""

    def __init__(self, registry: SessionRegistry, logger: Optional[ServerLogger] = None):
        self.registry = registry
        self.logger = logger or default_logger

    async def broadcast(self, sender: str, message: str) -> int:
        """
        Send "[sender]: message" to every registered session, sender included.

        A failed recipient is logged and skipped. Returns how many sessions
        the line was delivered to.
        """
        line = create_chat_line(sender, message)
        self.logger.log_chat(line)

        delivered = 0
        for session in self.registry.snapshot_values():
            try:
                await session.send(line)
                delivered += 1
            except Exception as e:
                # Recipient's own handler notices the broken connection and cleans up
                self.logger.error(f"Failed to send to {session.username} ({session.addr}): {e}")

        return delivered
