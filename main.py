#!/usr/bin/env python3
"""
ABOUTME: Entry point for the envset environment checker
ABOUTME: Simple wrapper that imports and runs the CLI
"""

from envset.cli import main

if __name__ == "__main__":
    main()
