#!/usr/bin/env python3
"""
gh-action-upgrader - Main Entry Point
"""

import sys
from action_upgrader.cli import main

if __name__ == "__main__":
    sys.exit(main())
