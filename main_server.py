#!/usr/bin/env python3
"""
Chat Relay Server - Main Entry Point

Usage:
    python main_server.py PORT CREDENTIALS_FILE

Optional arguments:
    --host HOST             Bind address (default: 0.0.0.0)
    --max-connections N     Connections handled at once (default: 100)
    --max-line-bytes N      Longest accepted client line (default: 65536)
    --log-level LEVEL       Console log level (default: INFO)
    --log-dir DIR           Also write server.log into DIR
"""

if __name__ == "__main__":
    import sys

    from relay_server.main_server import main

    sys.exit(main())
