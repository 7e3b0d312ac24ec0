"""Merges cached strings over the compiled-in defaults."""

import logging

from physicshub.constants import LanguageCode
from physicshub.language.store import TranslationStore
from physicshub.language.tables import DEFAULT_STRINGS, StringTable

logger = logging.getLogger(__name__)


def merge_tables(cached: StringTable, default: StringTable) -> StringTable:
    """Per key: the cached text if non-empty, otherwise the default."""
    return StringTable({key: cached[key] or default[key] for key in default})


class StringResolver:
    """Produces the display table for a language.

    The result never contains an empty string as long as the defaults are
    complete, whatever the cache holds.
    """

    def __init__(self, store: TranslationStore, defaults: dict = None):
        self.store = store
        self.defaults = defaults or DEFAULT_STRINGS

    def resolve(self, language: LanguageCode) -> StringTable:
        default = self.defaults[language]
        try:
            cached = self.store.get_cached(language)
        except Exception as e:
            logger.error(f'Could not read cached {language.name} strings, using defaults: {e}')
            return default
        return merge_tables(cached, default)

    def resolve_all(self) -> dict:
        return {language: self.resolve(language) for language in LanguageCode}

    def get(self, language: LanguageCode, key: str) -> str:
        return self.resolve(language)[key]
