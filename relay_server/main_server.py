#!/usr/bin/env python3
"""
Chat Relay Server - Main Entry Point

Accepts TCP connections, authenticates each one against the credential
store and relays every chat line to all logged-in users.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from relay_common.constants import DEFAULT_SERVER_HOST, MAX_CONNECTIONS, MAX_LINE_BYTES
from relay_server.chat.broadcaster import BroadcastEngine
from relay_server.chat.chat_server import ConnectionHandler
from relay_server.chat.registry import SessionRegistry
from relay_server.chat.session import Session
from relay_server.utils.config import ConfigError, ServerConfig, parse_port
from relay_server.utils.credentials import CredentialStore, CredentialsError, load_credentials
from relay_server.utils.logger import ServerLogger, logger as default_logger


class ChatRelayServer:
    """Listener that hands each accepted connection to its own handler task."""

    def __init__(self, config: ServerConfig, credentials: CredentialStore,
                 logger: Optional[ServerLogger] = None):
        self.config = config
        self.credentials = credentials
        self.logger = logger or default_logger
        self.registry = SessionRegistry()
        self.broadcaster = BroadcastEngine(self.registry, self.logger)
        self._workers: Optional[asyncio.Semaphore] = None
        self._server: Optional[asyncio.AbstractServer] = None

    @property
    def bound_port(self) -> Optional[int]:
        """Port actually bound, useful when configured with port 0."""
        if self._server is None or not self._server.sockets:
            return None
        return self._server.sockets[0].getsockname()[1]

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        addr = writer.get_extra_info('peername')
        self.logger.log_connection(addr)

        if self._workers.locked():
            self.logger.info(f"All {self.config.max_connections} workers busy, {addr} is waiting")

        try:
            async with self._workers:
                session = Session(reader, writer, self.logger)
                handler = ConnectionHandler(session, self.credentials, self.registry,
                                            self.broadcaster, self.logger)
                await handler.run()
        except asyncio.CancelledError:
            self.logger.info(f"Connection cancelled for {addr}")
            writer.close()
            raise
        except Exception as e:
            # A broken connection must never take the listener down
            self.logger.log_error(f"handler for {addr}", e)

    async def start(self):
        """Bind the listening socket. Bind errors propagate to the caller."""
        self._workers = asyncio.Semaphore(self.config.max_connections)
        self._server = await asyncio.start_server(
            self.handle_client,
            self.config.host,
            self.config.port,
            limit=self.config.max_line_bytes
        )

        addr = ', '.join(str(sock.getsockname()) for sock in self._server.sockets)
        self.logger.log_listening(addr)

    async def serve_forever(self):
        """Start the server and accept connections until cancelled."""
        if self._server is None:
            await self.start()

        async with self._server:
            await self._server.serve_forever()

    async def stop(self):
        """Stop accepting new connections."""
        if self._server is None:
            return
        self._server.close()
        await self._server.wait_closed()
        self.logger.info("Server stopped")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Multi-user chat relay server')
    parser.add_argument('port', type=str,
                        help='TCP port to listen on (1-65535)')
    parser.add_argument('credentials_file', type=str,
                        help='File of alternating usernames and passwords')
    parser.add_argument('--host', type=str, default=DEFAULT_SERVER_HOST,
                        help=f'Host to bind to (default: {DEFAULT_SERVER_HOST})')
    parser.add_argument('--max-connections', type=int, default=MAX_CONNECTIONS,
                        help=f'Connections handled at once (default: {MAX_CONNECTIONS})')
    parser.add_argument('--max-line-bytes', type=int, default=MAX_LINE_BYTES,
                        help=f'Longest accepted client line (default: {MAX_LINE_BYTES})')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Console log level (default: INFO)')
    parser.add_argument('--log-dir', type=str, default=None,
                        help='Also write server.log into this directory')
    return parser


def main(argv=None) -> int:
    """Validate arguments, load credentials and serve. Returns the exit status."""
    args = build_arg_parser().parse_args(argv)
    logger = ServerLogger(logs_dir=args.log_dir, log_level=getattr(logging, args.log_level))

    try:
        config = ServerConfig(
            port=parse_port(args.port),
            credentials_path=args.credentials_file,
            host=args.host,
            max_connections=args.max_connections,
            max_line_bytes=args.max_line_bytes,
            logs_dir=args.log_dir
        ).validate()
        credentials = load_credentials(config.credentials_path)
    except (ConfigError, CredentialsError) as e:
        logger.error(str(e))
        return 1

    logger.info(f"Loaded {len(credentials)} users from {config.credentials_path}")
    server = ChatRelayServer(config, credentials, logger)

    try:
        asyncio.run(server.serve_forever())
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except OSError as e:
        logger.log_error("server", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
