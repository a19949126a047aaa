"""
Configuration utilities for realmaccess.
Provides environment loading and typed value casting.
"""

import os
from typing import Any, Dict, Optional


def load_config_from_env(prefix: str = "REALMACCESS_") -> Dict[str, str]:
    """
    Load configuration from environment variables with given prefix.
    """
    config = {}

    for key, value in os.environ.items():
        if key.startswith(prefix):
            # Remove prefix and convert to lowercase
            config_key = key[len(prefix):].lower()
            config[config_key] = value

    return config


def as_bool(value: Any) -> bool:
    """
    Read a flag that may arrive as a string.

    Only "true", "1", "yes" and "on" (any case) are true for strings.
    """
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return bool(value)


def get_config_value(key: str, default: Any = None,
                     cast_type: Optional[type] = None,
                     env_prefix: str = "REALMACCESS_") -> Any:
    """
    Get configuration value from environment or return default.
    Optionally cast to specified type.
    """
    env_key = f"{env_prefix}{key.upper()}"
    value = os.environ.get(env_key, default)

    if value is None or cast_type is None:
        return value

    try:
        if cast_type == bool:
            return as_bool(value)
        elif cast_type == list:
            # Handle list conversion (comma-separated)
            if isinstance(value, str):
                return [item.strip() for item in value.split(',') if item.strip()]
            return list(value) if value else []
        else:
            return cast_type(value)
    except (ValueError, TypeError):
        return default
