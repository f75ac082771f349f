"""
Chat session module.

A Session wraps one accepted connection with line-oriented send and receive.
"""

import asyncio
from typing import Optional

from relay_common.constants import ENCODING, LINE_TERMINATOR
from relay_server.utils.logger import ServerLogger, logger as default_logger


class LineTooLongError(OSError):
    """Raised when a client sends a line longer than the reader limit."""


class Session:
    """One client connection and its line I/O."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
                 logger: Optional[ServerLogger] = None):
        self.reader = reader
        self.writer = writer
        self.addr = writer.get_extra_info('peername')
        self.username: Optional[str] = None  # set once authenticated
        self.logger = logger or default_logger
        self._send_lock = asyncio.Lock()  # one line at a time per client
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, line: str):
        """Write one line plus terminator and wait until it is flushed."""
        data = (line + LINE_TERMINATOR).encode(ENCODING)
        async with self._send_lock:
            self.writer.write(data)
            await self.writer.drain()

    async def receive(self) -> Optional[str]:
        """
        Wait for the next line and return it without its terminator.

        Returns None once the peer has closed the connection. A last line
        that ends at EOF without a terminator is still returned.
        """
        try:
            data = await self.reader.readline()
        except ValueError as e:
            # StreamReader reports a line over its limit as ValueError
            raise LineTooLongError(f"Line from {self.addr} too long: {e}") from e
        if not data:
            return None
        if data.endswith(b'\n'):
            data = data[:-1]
            if data.endswith(b'\r'):
                data = data[:-1]
        return data.decode(ENCODING, errors='replace')

    async def close(self):
        """Close the transport. Later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (ConnectionError, OSError) as e:
            # Peer already reset the connection
            self.logger.debug(f"Close of {self.addr} reported: {e}")

    def __repr__(self):
        return f"Session(username={self.username!r}, addr={self.addr!r})"
