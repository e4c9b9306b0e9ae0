"""
Entry point for ``python -m pargrep.cli``.
"""

from .main import cli

if __name__ == "__main__":
    cli(prog_name="pargrep")
