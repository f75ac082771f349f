"""
Server package for the multi-user chat relay.

This package contains all server-side functionality including:
- Connection handling and authentication
- Session registry and broadcasting
- Configuration, credentials and logging utilities
"""
