"""
Centralized constants for Mr. Want.

Model defaults, the fixed prompt and user-facing strings live here so the
controller, the generation adapter and the interface agree on them.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

MRWANT_CONFIG_DIR = Path.home() / ".config" / "mrwant"

# =============================================================================
# GENERATION SERVICE
# =============================================================================

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
GEMINI_SERVICE_NAME = "gemini"

SYSTEM_INSTRUCTION = (
    "You are Mr. Want. Answer the user's question immediately, concisely, and "
    "accurately. Do not use markdown headers or heavy formatting. Just plain, "
    "direct text. Maximum efficiency."
)

# =============================================================================
# USER-FACING TEXT
# =============================================================================

APP_TITLE = "Mr. Want"
INPUT_PLACEHOLDER = "What do you want to know?"
UNAVAILABLE_MESSAGE = "Mr. Want is currently unavailable. Please try again."

# =============================================================================
# LOGGING
# =============================================================================

LOG_FILE_NAME = "mrwant.log"
MAX_LOG_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 2
DEFAULT_LOG_LEVEL = "INFO"

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

# API_KEY is accepted as a fallback for GOOGLE_API_KEY.
API_KEY_ENV_VARS = ("GOOGLE_API_KEY", "API_KEY")

ENV_VAR_DEFINITIONS = {
    "GOOGLE_API_KEY": {
        "description": "API key for the Gemini generation service",
        "default": None,
        "valid_values": None,
        "sensitive": True,
    },
    "API_KEY": {
        "description": "Fallback API key when GOOGLE_API_KEY is not set",
        "default": None,
        "valid_values": None,
        "sensitive": True,
    },
    "MRWANT_MODEL": {
        "description": "Gemini model used to answer questions",
        "default": DEFAULT_GEMINI_MODEL,
        "valid_values": None,
    },
    "MRWANT_TEMPERATURE": {
        "description": "Sampling temperature (float); unset uses the model default",
        "default": None,
        "type": float,
        "valid_values": None,
    },
    "MRWANT_LOG_LEVEL": {
        "description": "Log level for ~/.config/mrwant/mrwant.log",
        "default": DEFAULT_LOG_LEVEL,
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR"],
    },
}
