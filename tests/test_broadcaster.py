#!/usr/bin/env python3
"""
Unit tests for BroadcastEngine.

Tests the fan-out rules:
- The sender receives its own message
- A failing recipient does not stop delivery to the others
- Every message is logged on the server
"""

import logging
import unittest
from unittest.mock import AsyncMock, Mock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from relay_server.chat.broadcaster import BroadcastEngine
from relay_server.chat.registry import SessionRegistry
from relay_server.utils.logger import ServerLogger

LOGGER_NAME = 'chat_relay.test.broadcaster'


def make_session(username, fail=False):
    session = Mock()
    session.username = username
    session.addr = ('127.0.0.1', 50000)
    session.send = AsyncMock()
    if fail:
        session.send.side_effect = BrokenPipeError("gone")
    return session


class TestBroadcastEngine(unittest.IsolatedAsyncioTestCase):
    """Test cases for broadcast fan-out."""

    async def asyncSetUp(self):
        self.logger = ServerLogger(log_level=logging.INFO, name=LOGGER_NAME)
        self.registry = SessionRegistry()
        self.engine = BroadcastEngine(self.registry, self.logger)

    async def test_self_echo(self):
        alice = make_session("alice")
        self.registry.try_register("alice", alice)

        delivered = await self.engine.broadcast("alice", "hello")

        alice.send.assert_awaited_once_with("[alice]: hello")
        self.assertEqual(delivered, 1)

    async def test_delivers_to_everyone(self):
        sessions = {name: make_session(name) for name in ("alice", "bob", "carol")}
        for name, session in sessions.items():
            self.registry.try_register(name, session)

        await self.engine.broadcast("bob", "hi all")

        for session in sessions.values():
            session.send.assert_awaited_once_with("[bob]: hi all")

    async def test_empty_message(self):
        alice = make_session("alice")
        self.registry.try_register("alice", alice)
        await self.engine.broadcast("alice", "")
        alice.send.assert_awaited_once_with("[alice]: ")

    async def test_failed_recipient_isolated(self):
        alice = make_session("alice")
        broken = make_session("bob", fail=True)
        carol = make_session("carol")
        self.registry.try_register("alice", alice)
        self.registry.try_register("bob", broken)
        self.registry.try_register("carol", carol)

        with self.assertLogs(LOGGER_NAME, level='ERROR') as logs:
            delivered = await self.engine.broadcast("alice", "hello")

        self.assertEqual(delivered, 2)
        alice.send.assert_awaited_once_with("[alice]: hello")
        carol.send.assert_awaited_once_with("[alice]: hello")
        self.assertTrue(any("bob" in line for line in logs.output))
        # Only the owning handler removes entries
        self.assertIn("bob", self.registry)

    async def test_logged_without_recipients(self):
        with self.assertLogs(LOGGER_NAME, level='INFO') as logs:
            delivered = await self.engine.broadcast("alice", "anyone?")
        self.assertEqual(delivered, 0)
        self.assertTrue(any("[alice]: anyone?" in line for line in logs.output))


if __name__ == '__main__':
    unittest.main()
