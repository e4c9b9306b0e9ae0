"""
Command-line interface for pargrep.
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
