# File: ctrlgen/__main__.py
"""
ctrlgen — Module entry point.

Allows running the generator directly via::

    python -m ctrlgen --model app.models:BlogPost

This module simply delegates to the CLI entry point defined in ``ctrlgen.cli``.
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from ctrlgen.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
