"""Utility modules for Mr. Want.

- logging_utils: Rotating file logging for the terminal interface
- output: Shared Rich consoles for launcher output
"""
