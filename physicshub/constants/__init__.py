"""Shared constants for the application."""

from physicshub.constants.strings import (
    STRING_KEYS,
    LANGUAGE_ALIASES,
    DEFAULT_ENGLISH,
    DEFAULT_VIETNAMESE,
    LanguageCode,
    normalize_language,
    parse_language,
)

__all__ = [
    'STRING_KEYS',
    'LANGUAGE_ALIASES',
    'DEFAULT_ENGLISH',
    'DEFAULT_VIETNAMESE',
    'LanguageCode',
    'normalize_language',
    'parse_language',
]
