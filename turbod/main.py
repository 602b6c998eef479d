#!/usr/bin/env python3
"""
Main entry point for the Typer-based turbod CLI.

This delegates to the UI layer in turbod.ui.cli to keep the
console script mapping stable.
"""

from turbod.ui.cli import run as turbod


if __name__ == "__main__":
    turbod()
