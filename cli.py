#!/usr/bin/env python3
"""
podcomplete CLI entry point.

This script runs the podcomplete command-line interface from a source checkout.
"""

from podcomplete.cli import app


if __name__ == "__main__":
    app()
