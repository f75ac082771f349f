#!/usr/bin/env python3
"""
Unit tests for relay_common.protocol_definitions.

Covers parsing of the "<username> <password>" login line and the texts
the server sends back.
"""

import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from relay_common.protocol_definitions import (
    AuthRequest, split_auth_line, parse_auth_line, create_chat_line,
    create_invalid_format_message, create_unknown_user_message, create_welcome_messages
)


class TestParseAuthLine(unittest.TestCase):
    """Test cases for login line parsing."""

    def test_two_tokens(self):
        self.assertEqual(parse_auth_line("alice pw1"), AuthRequest("alice", "pw1"))

    def test_trailing_space_is_ignored(self):
        self.assertEqual(parse_auth_line("alice pw1 "), AuthRequest("alice", "pw1"))

    def test_double_space_gives_three_tokens(self):
        self.assertEqual(split_auth_line("alice  pw1"), ["alice", "", "pw1"])
        self.assertIsNone(parse_auth_line("alice  pw1"))

    def test_leading_space_rejected(self):
        self.assertIsNone(parse_auth_line(" alice pw1"))

    def test_wrong_token_counts_rejected(self):
        for line in ["", "alice", "alice ", "alice pw1 extra", "a b c d"]:
            with self.subTest(line=line):
                self.assertIsNone(parse_auth_line(line))

    def test_only_space_separates(self):
        # Tabs are part of a token, not a separator
        self.assertEqual(parse_auth_line("alice\tx pw1"), AuthRequest("alice\tx", "pw1"))


class TestServerTexts(unittest.TestCase):
    """Test cases for server-to-client lines."""

    def test_chat_line(self):
        self.assertEqual(create_chat_line("alice", "hello"), "[alice]: hello")

    def test_chat_line_empty_message(self):
        self.assertEqual(create_chat_line("alice", ""), "[alice]: ")

    def test_chat_line_keeps_braces(self):
        self.assertEqual(create_chat_line("bob", "{x}"), "[bob]: {x}")

    def test_invalid_format_echoes_line(self):
        self.assertEqual(create_invalid_format_message("oops"),
                         "Invalid username password format. Got: 'oops'")

    def test_unknown_user(self):
        self.assertEqual(create_unknown_user_message("carol"), "Unknown user: 'carol'")

    def test_welcome_is_two_lines(self):
        self.assertEqual(create_welcome_messages(), [
            "Welcome to the server!",
            "Please be kind and respectful to your fellow classmates!",
        ])


if __name__ == '__main__':
    unittest.main()
