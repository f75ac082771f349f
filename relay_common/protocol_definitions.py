"""
Protocol definitions for the chat relay.

This module defines the line formats exchanged between client and server:
the authentication line a client sends and the lines the server sends back.
"""

from typing import List, Optional
from dataclasses import dataclass

from relay_common.constants import AUTH_SEPARATOR, AUTH_TOKEN_COUNT, ServerMessages


@dataclass
class AuthRequest:
    """Credentials parsed from an authentication line."""
    username: str
    password: str


def split_auth_line(line: str) -> List[str]:
    """
    Split an authentication line on single spaces.

    Trailing empty tokens are dropped, so "alice pw1 " yields two tokens
    while "alice  pw1" yields three.
    """
    tokens = line.split(AUTH_SEPARATOR)
    while tokens and tokens[-1] == '':
        tokens.pop()
    return tokens


def parse_auth_line(line: str) -> Optional[AuthRequest]:
    """Parse "<username> <password>", or return None if the format is wrong."""
    tokens = split_auth_line(line)
    if len(tokens) != AUTH_TOKEN_COUNT:
        return None
    return AuthRequest(username=tokens[0], password=tokens[1])


def create_auth_prompt() -> str:
    """Create the prompt sent to every new connection."""
    return ServerMessages.AUTH_PROMPT


def create_invalid_format_message(line: str) -> str:
    """Create the rejection for a malformed authentication line."""
    return ServerMessages.INVALID_FORMAT.format(line=line)


def create_unknown_user_message(username: str) -> str:
    """Create the rejection for a username missing from the credential store."""
    return ServerMessages.UNKNOWN_USER.format(username=username)


def create_incorrect_password_message() -> str:
    return ServerMessages.INCORRECT_PASSWORD


def create_closing_message() -> str:
    return ServerMessages.CLOSING


def create_already_connected_message() -> str:
    return ServerMessages.ALREADY_CONNECTED


def create_welcome_messages() -> List[str]:
    """Create the lines sent after a successful login."""
    return [ServerMessages.WELCOME, ServerMessages.CONDUCT_REMINDER]


def create_chat_line(username: str, message: str) -> str:
    """Create the line relayed to every client for one chat message."""
    return ServerMessages.CHAT_LINE.format(username=username, message=message)
