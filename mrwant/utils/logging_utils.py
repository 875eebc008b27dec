"""Simple logging utilities for Mr. Want.

Modules use the standard pattern:

    import logging
    logger = logging.getLogger(__name__)

The terminal belongs to the Textual interface, so records go to a rotating
file instead of the console. Call ``setup_tui_logging`` once from the launcher.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from mrwant.config.constants import LOG_BACKUP_COUNT, LOG_FILE_NAME, MAX_LOG_BYTES

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_path(log_dir: Optional[Path] = None) -> Path:
    """Return the log file path, creating its directory."""
    # Inline path: the launcher may call this before settings are loaded.
    log_dir = log_dir or Path.home() / ".config" / "mrwant"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / LOG_FILE_NAME


def setup_tui_logging(
    module_name: str,
    level: str = "INFO",
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up file logging for the terminal interface.

    The root logger is set to WARNING to keep third-party libraries quiet
    (LangChain and the Google client are chatty). Mr. Want's own loggers
    (mrwant.*) use ``level``.

    Returns:
        The logger for ``module_name``.
    """
    try:
        log_file = get_log_path(log_dir)

        root = logging.getLogger()
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            handler = RotatingFileHandler(
                log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT
            )
            handler.setFormatter(logging.Formatter(_FORMAT))
            root.addHandler(handler)
        root.setLevel(logging.WARNING)

        logging.getLogger("mrwant").setLevel(getattr(logging, level.upper(), logging.INFO))

        return logging.getLogger(module_name)

    except Exception as e:
        # We can't log this failure since logging is what's failing
        import sys

        print(f"Warning: TUI logging setup failed: {e}", file=sys.stderr)
        return logging.getLogger(module_name)
