"""Selected UI language, persisted next to the translation cache."""

import logging

from physicshub.constants import LanguageCode
from physicshub.language.store import KeyValueBackend, StoreError

logger = logging.getLogger(__name__)

SELECTED_LANGUAGE = 'selected_language'

DEFAULT_LANGUAGE = LanguageCode.EN


class LanguageManager:
    """Reads and writes the user's language choice."""

    def __init__(self, backend: KeyValueBackend):
        self.backend = backend

    def current_language(self) -> LanguageCode:
        try:
            code = self.backend.read_many([SELECTED_LANGUAGE]).get(SELECTED_LANGUAGE)
        except StoreError as e:
            logger.warning(f'Could not read selected language: {e}')
            return DEFAULT_LANGUAGE

        if code is None:
            return DEFAULT_LANGUAGE
        # Stored as the display name ("EN"/"VN")
        for language in LanguageCode:
            if language.display_name == code:
                return language
        return DEFAULT_LANGUAGE

    def set_language(self, language: LanguageCode) -> bool:
        """Persist the choice. False if the store could not be written."""
        try:
            self.backend.write_many({SELECTED_LANGUAGE: language.display_name})
        except StoreError as e:
            logger.error(f'Could not save selected language: {e}')
            return False
        logger.info(f'Language set to {language.display_name}')
        return True

    def toggle_language(self) -> LanguageCode:
        """Switch EN <-> VN and return the language now in effect."""
        current = self.current_language()
        new_language = LanguageCode.VN if current == LanguageCode.EN else LanguageCode.EN
        if not self.set_language(new_language):
            return current
        return new_language
