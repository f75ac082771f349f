"""
Chat module for server-side messaging functionality.

Handles:
- Line I/O per connection
- Login and the one-session-per-user rule
- Message broadcasting
"""
