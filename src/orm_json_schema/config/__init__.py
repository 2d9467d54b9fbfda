"""Configuration management for orm-json-schema.

Usage:
    >>> from orm_json_schema.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.schema_dialect)
"""

from orm_json_schema.config.settings import DRAFT_07_URI, Settings, get_settings

__all__ = [
    "DRAFT_07_URI",
    "Settings",
    "get_settings",
]
