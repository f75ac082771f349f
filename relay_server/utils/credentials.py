"""
Credential store module.

Loads the username/password table once at startup and answers lookups for
the connection handlers. The table never changes while the server runs.
"""

import hmac
from collections import abc
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

from relay_common.constants import ENCODING


class CredentialsError(Exception):
    """Raised when the credentials file cannot be read or is malformed."""


class CredentialStore(abc.Mapping):
    """Immutable username -> password table."""

    def __init__(self, user2pass: Mapping[str, str]):
        self._user2pass = MappingProxyType(dict(user2pass))

    def lookup(self, username: str) -> Optional[str]:
        """Return the password for username, or None if the user is unknown."""
        return self._user2pass.get(username)

    def check_password(self, username: str, password: str) -> bool:
        """Compare password against the stored one in constant time."""
        expected = self.lookup(username)
        if expected is None:
            return False
        return hmac.compare_digest(expected.encode(ENCODING), password.encode(ENCODING))

    def __getitem__(self, username: str) -> str:
        return self._user2pass[username]

    def __iter__(self) -> Iterator[str]:
        return iter(self._user2pass)

    def __len__(self) -> int:
        return len(self._user2pass)

    def __repr__(self):
        return f"CredentialStore({len(self)} users)"


def parse_credentials(text: str) -> Dict[str, str]:
    """
    Parse a whitespace-separated token stream of alternating users and passwords.

    Line breaks carry no meaning; a repeated user keeps its last password.
    """
    tokens = text.split()
    if len(tokens) % 2:
        raise CredentialsError(
            f"Credentials file has an odd number of tokens; missing password for user: {tokens[-1]}"
        )
    return {tokens[i]: tokens[i + 1] for i in range(0, len(tokens), 2)}


def load_credentials(path) -> CredentialStore:
    """Read the credentials file at path into a CredentialStore."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding=ENCODING)
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialsError(f"Error with credentials file: {file_path}: {e}") from e
    return CredentialStore(parse_credentials(text))
