"""
Chat server module.

This module drives one client connection from the login prompt through
message relaying to disconnect.
"""

from enum import Enum
from typing import Optional

from relay_common.protocol_definitions import (
    parse_auth_line, create_auth_prompt, create_invalid_format_message,
    create_unknown_user_message, create_incorrect_password_message,
    create_closing_message, create_already_connected_message, create_welcome_messages
)
from relay_server.chat.broadcaster import BroadcastEngine
from relay_server.chat.registry import SessionRegistry
from relay_server.chat.session import Session
from relay_server.utils.credentials import CredentialStore
from relay_server.utils.logger import ServerLogger, logger as default_logger


class ConnectionState(Enum):
    CONNECTED = 'connected'
    AUTHENTICATING = 'authenticating'
    AUTHENTICATED_IDLE = 'authenticated_idle'
    ACTIVE = 'active'
    CLOSED = 'closed'


class ConnectionHandler:
    """Runs the login and relay loop for a single session."""

    def __init__(self, session: Session, credentials: CredentialStore,
                 registry: SessionRegistry, broadcaster: BroadcastEngine,
                 logger: Optional[ServerLogger] = None):
        self.session = session
        self.credentials = credentials
        self.registry = registry
        self.broadcaster = broadcaster
        self.logger = logger or default_logger
        self.state = ConnectionState.CONNECTED
        self.username: Optional[str] = None
        self.registered = False

    async def run(self):
        """
        Handle the connection until the peer leaves or an I/O error occurs.

        The registry entry (if any) is removed and the session closed on
        every exit path. I/O errors are logged here; anything else, task
        cancellation included, propagates to the caller after cleanup.
        """
        addr = self.session.addr
        try:
            if await self.authenticate():
                await self.relay()
        except OSError as e:
            self.logger.log_error(f"connection {addr}", e)
        finally:
            if self.registered:
                self.registry.unregister(self.username, self.session)
                self.registered = False
                self.logger.log_disconnect(self.username, addr)
            await self.session.close()
            self.state = ConnectionState.CLOSED

    async def authenticate(self) -> bool:
        """Prompt for credentials and register the session. Returns True on success."""
        await self.session.send(create_auth_prompt())
        self.state = ConnectionState.AUTHENTICATING

        auth_line = await self.session.receive()
        if auth_line is None:
            # Client left before answering the prompt
            self.logger.debug(f"{self.session.addr} disconnected during authentication")
            return False

        request = parse_auth_line(auth_line)
        if request is None:
            await self._reject(f"bad auth line {auth_line!r}",
                               create_invalid_format_message(auth_line))
            return False

        if self.credentials.lookup(request.username) is None:
            await self._reject(f"unknown user {request.username!r}",
                               create_unknown_user_message(request.username))
            return False

        if not self.credentials.check_password(request.username, request.password):
            await self._reject(f"incorrect password for {request.username!r}",
                               create_incorrect_password_message())
            return False

        if not self.registry.try_register(request.username, self.session):
            self.logger.log_auth_failure(self.session.addr, f"{request.username!r} already connected")
            await self.session.send(create_already_connected_message())
            return False

        self.username = request.username
        self.session.username = request.username
        self.registered = True
        self.state = ConnectionState.AUTHENTICATED_IDLE
        self.logger.log_login(self.username, self.session.addr)

        for line in create_welcome_messages():
            await self.session.send(line)
        return True

    async def relay(self):
        """Broadcast every line the client sends until it disconnects."""
        self.state = ConnectionState.ACTIVE
        while True:
            line = await self.session.receive()
            if line is None:
                break
            await self.broadcaster.broadcast(self.username, line)

    async def _reject(self, reason: str, message: str):
        self.logger.log_auth_failure(self.session.addr, reason)
        await self.session.send(message)
        await self.session.send(create_closing_message())
