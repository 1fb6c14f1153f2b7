"""CLI support module for modulemd-yaml.

The Typer application itself lives in ``modulemd_yaml.cli_main``.
"""

from modulemd_yaml.cli.error_formatter import ErrorFormatter, ErrorTable
from modulemd_yaml.cli.exception_handler import handle_exceptions
from modulemd_yaml.cli.logging_config import setup_logging

__all__ = [
    "ErrorFormatter",
    "ErrorTable",
    "handle_exceptions",
    "setup_logging",
]
