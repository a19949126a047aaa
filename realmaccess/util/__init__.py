"""
Utility package providing identifier and configuration helpers.
"""

from .ids import get_string_id, array_ids, as_list
from .config import load_config_from_env, get_config_value, as_bool

__all__ = [
    "get_string_id",
    "array_ids",
    "as_list",
    "load_config_from_env",
    "get_config_value",
    "as_bool",
]
