"""ColdSize command-line interface package.

Supports ``python -m coldsize.cli`` as an alternative to the ``coldsize`` entry point.
"""

from coldsize.cli.main import cli, main

__all__ = ["cli", "main"]
