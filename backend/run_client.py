#!/usr/bin/env python
"""
Run the todo client.

Usage:
    python run_client.py login you@example.com
    python run_client.py add Buy milk --due 2024-01-01
    python run_client.py list --filter pending
"""

import sys

from client.cli import main


if __name__ == "__main__":
    sys.exit(main())
