"""Shared console output utilities."""

from rich.console import Console

# Shared console instance for all CLI output
console = Console(force_terminal=True, color_system="auto")

# Errors go to stderr so they never mix with piped output
err_console = Console(stderr=True, force_terminal=True, color_system="auto")
