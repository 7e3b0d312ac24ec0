"""Remote translation source.

Pulls the bilingual string table from the translations endpoint:

    GET <TRANSLATIONS_URL>  ->  {"en": {<key>: <text>, ...}, "vn": {...}}

Absent keys are empty strings, unknown keys are ignored. One request per
call, no retries; retry policy belongs to the caller.
"""

import logging
from typing import Optional, Tuple

import requests

from physicshub.language.tables import TranslationPair

logger = logging.getLogger(__name__)

DEFAULT_TRANSLATIONS_URL = 'http://localhost:5000/api/translations'
DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_READ_TIMEOUT = 10


class FetchError(Exception):
    """Base class for failed translation fetches."""

    code = 'fetch_error'


class NetworkUnavailable(FetchError):
    """DNS failure, refused connection, timeout and friends."""

    code = 'network_unavailable'


class ServerRejected(FetchError):
    """The server answered with a non-success status."""

    code = 'server_rejected'

    def __init__(self, status_code: int):
        super().__init__(f'Server responded with HTTP {status_code}')
        self.status_code = status_code


class MalformedPayload(FetchError):
    """The response body does not have the {"en": {...}, "vn": {...}} shape."""

    code = 'malformed_payload'


class TranslationFetcher:
    """Performs exactly one round-trip to the translations endpoint per call."""

    def __init__(
        self,
        url: str = DEFAULT_TRANSLATIONS_URL,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = (connect_timeout, read_timeout)
        # requests module itself when no session is given; both expose .get()
        self.http = session or requests

    def fetch_remote(self) -> Tuple[Optional[TranslationPair], Optional[FetchError]]:
        """Fetch both string tables.

        Returns:
            Tuple of (translations, error)
            If successful: (TranslationPair, None)
            If failed: (None, FetchError)
        """
        logger.info(f'Fetching translations from {self.url}')

        try:
            response = self.http.get(self.url, timeout=self.timeout)
        except requests.Timeout as e:
            logger.warning(f'Translations fetch timed out: {e}')
            return None, NetworkUnavailable(f'Timed out: {e}')
        except requests.RequestException as e:
            logger.warning(f'Translations fetch network error: {e}')
            return None, NetworkUnavailable(str(e))

        if response.status_code != 200:
            logger.warning(f'Translations fetch rejected - HTTP {response.status_code}')
            return None, ServerRejected(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f'Translations payload is not JSON: {e}')
            return None, MalformedPayload(f'Body is not JSON: {e}')

        try:
            translations = TranslationPair.from_dict(data)
        except ValueError as e:
            logger.error(f'Translations payload has unexpected shape: {e}')
            return None, MalformedPayload(str(e))

        logger.debug(
            f'Fetched translations: en missing {len(translations.en.missing_keys())}, '
            f'vn missing {len(translations.vn.missing_keys())}'
        )
        return translations, None
