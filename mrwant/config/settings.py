"""Configuration utilities for Mr. Want.

Settings are read from the environment (and a local ``.env`` file) once at
startup, frozen, and handed to whatever needs them.
"""

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv

from ..exceptions import ConfigurationError
from .constants import (
    API_KEY_ENV_VARS,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_LOG_LEVEL,
    ENV_VAR_DEFINITIONS,
    SYSTEM_INSTRUCTION,
)

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, immutable after startup."""

    google_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    temperature: Optional[float] = None
    system_instruction: str = SYSTEM_INSTRUCTION
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def has_api_key(self) -> bool:
        return bool(self.google_api_key)

    def with_model(self, model: Optional[str]) -> "Settings":
        """Return a copy using ``model``, or self when no override is given."""
        if not model:
            return self
        return replace(self, gemini_model=model)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment.

        Raises:
            ConfigurationError: If a variable holds a value we cannot use.
        """
        invalid = _invalid_env_vars()
        if invalid:
            raise ConfigurationError("; ".join(invalid.values()), setting=", ".join(invalid))

        api_key = None
        for name in API_KEY_ENV_VARS:
            value = os.environ.get(name, "").strip()
            if value:
                api_key = value
                break

        raw_temperature = get_env_var("MRWANT_TEMPERATURE")

        return cls(
            google_api_key=api_key,
            gemini_model=get_env_var("MRWANT_MODEL") or DEFAULT_GEMINI_MODEL,
            temperature=float(raw_temperature) if raw_temperature else None,
            log_level=(get_env_var("MRWANT_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Check ``value`` against what mrwant accepts for ``name``.

    Unset, blank and unknown variables always pass. Returns ``(ok, error)``.
    """
    definition = ENV_VAR_DEFINITIONS.get(name)
    if definition is None or not value:
        return True, None

    choices = definition.get("valid_values")
    if choices and value.upper() not in choices:
        return False, f"{name} must be one of {', '.join(choices)}, got {value!r}"

    if definition.get("type") is float:
        try:
            float(value)
        except ValueError:
            return False, f"{name} must be a number, got {value!r}"

    return True, None


def _invalid_env_vars() -> Dict[str, str]:
    invalid = {}
    for name in ENV_VAR_DEFINITIONS:
        ok, error = validate_env_var(name, os.environ.get(name))
        if not ok:
            invalid[name] = error
    return invalid


def validate_all_env_vars() -> List[str]:
    return list(_invalid_env_vars().values())


def get_env_var(name: str) -> Optional[str]:
    """Read ``name`` from the environment, falling back to its default.

    Raises:
        ConfigurationError: If the value is set but not usable.
    """
    value = os.environ.get(name)
    if value is None:
        return ENV_VAR_DEFINITIONS.get(name, {}).get("default")

    ok, error = validate_env_var(name, value)
    if not ok:
        raise ConfigurationError(error, setting=name)
    return value


def _display_value(value: Optional[str], sensitive: bool) -> Optional[str]:
    # API keys keep their 4-char prefix so the user can tell which one is loaded
    if not value or not sensitive:
        return value
    return value[:4] + "..." if len(value) > 4 else "***"


def get_env_info() -> Dict[str, Dict]:
    """Rows for ``mrwant env``: one per variable mrwant reads."""
    info = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        sensitive = definition.get("sensitive", False)
        info[name] = {
            "description": definition["description"],
            "value": _display_value(value, sensitive),
            "is_set": value is not None,
            "valid": validate_env_var(name, value)[0],
            "default": definition.get("default"),
            "sensitive": sensitive,
        }
    return info
