"""Utility modules."""

from .colors import Colors
from .config import Config, ConfigValidationError, create_default_config
from .validators import (
    is_valid_locale_code,
    is_rtl_locale,
    sanitize_key_name,
    is_excluded_string,
)

__all__ = [
    'Colors',
    'Config',
    'ConfigValidationError',
    'create_default_config',
    'is_valid_locale_code',
    'is_rtl_locale',
    'sanitize_key_name',
    'is_excluded_string',
]
