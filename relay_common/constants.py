"""
Shared constants for the chat relay.

This module contains the network defaults and every fixed line of text the
server sends to clients.
"""

# Network Configuration
DEFAULT_SERVER_HOST = '0.0.0.0'
MIN_PORT = 1
MAX_PORT = 65535

# Worker pool
MAX_CONNECTIONS = 100  # concurrently running connection handlers

# Line I/O
ENCODING = 'utf-8'
LINE_TERMINATOR = '\n'
MAX_LINE_BYTES = 64 * 1024  # longest line accepted from a client

# Authentication
AUTH_SEPARATOR = ' '
AUTH_TOKEN_COUNT = 2

# Logging
LOG_DIR = None  # console only unless a directory is configured
SERVER_LOG_FILE = 'server.log'
LOGGER_NAME = 'chat_relay'


# Server to Client texts
class ServerMessages:
    AUTH_PROMPT = 'Please enter your username and password, separated by a space'
    INVALID_FORMAT = "Invalid username password format. Got: '{line}'"
    UNKNOWN_USER = "Unknown user: '{username}'"
    INCORRECT_PASSWORD = 'Incorrect password for user'
    CLOSING = 'Closing connection, please try again with correct authentication'
    ALREADY_CONNECTED = (
        'You are already connected with a different client to this server. '
        'Please disconnect the other client before continuing'
    )
    WELCOME = 'Welcome to the server!'
    CONDUCT_REMINDER = 'Please be kind and respectful to your fellow classmates!'

    # Relayed chat line
    CHAT_LINE = '[{username}]: {message}'
