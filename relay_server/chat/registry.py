"""
Session registry module.

Maps each logged-in username to its single active session.
"""

from typing import Dict, List, Optional

from relay_server.chat.session import Session


class SessionRegistry:
    """
    Directory of active sessions, at most one per username.

    Insertion is an atomic check-and-insert: a username that is already
    present keeps its existing session. Removal only succeeds for the
    session that is currently registered, so a late cleanup from an old
    connection can never drop a newer login for the same name.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}  # username -> session

    def try_register(self, username: str, session: Session) -> bool:
        """Register session for username unless the name is already active."""
        # setdefault is a single atomic step, no await in between
        return self._sessions.setdefault(username, session) is session

    def unregister(self, username: str, session: Session) -> bool:
        """Remove username if it still maps to session. Returns True if removed."""
        if self._sessions.get(username) is session:
            del self._sessions[username]
            return True
        return False

    def snapshot_values(self) -> List[Session]:
        """Point-in-time list of registered sessions."""
        return list(self._sessions.values())

    def get(self, username: str) -> Optional[Session]:
        return self._sessions.get(username)

    def usernames(self) -> List[str]:
        return list(self._sessions)

    def __contains__(self, username: str) -> bool:
        return username in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
