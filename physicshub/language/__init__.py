"""Client-side translation cache and fallback.

Typical use from the presentation layer:

    context = build_translation_context()
    context.controller.ensure_fresh_async()
    strings = context.strings()
    strings.noticeBoard

Every component is constructed once here and handed to its consumers;
nothing in this package keeps module-level instances.
"""

import os
import logging
from dataclasses import dataclass

from physicshub.constants import LanguageCode
from physicshub.language.controller import (
    CACHE_DURATION_MS,
    TranslationCacheController,
)
from physicshub.language.fetcher import (
    DEFAULT_TRANSLATIONS_URL,
    FetchError,
    MalformedPayload,
    NetworkUnavailable,
    ServerRejected,
    TranslationFetcher,
)
from physicshub.language.manager import LanguageManager
from physicshub.language.resolver import StringResolver, merge_tables
from physicshub.language.store import (
    DEFAULT_STORE_URL,
    KeyValueBackend,
    RedisKeyValueBackend,
    SqlKeyValueBackend,
    StoreError,
    TranslationStore,
)
from physicshub.language.tables import (
    DEFAULT_STRINGS,
    StringTable,
    TranslationBundle,
    TranslationPair,
)

logger = logging.getLogger(__name__)


@dataclass
class TranslationContext:
    """Application-scoped set of translation services."""

    backend: KeyValueBackend
    store: TranslationStore
    fetcher: TranslationFetcher
    controller: TranslationCacheController
    resolver: StringResolver
    languages: LanguageManager

    def strings(self, language: LanguageCode = None) -> StringTable:
        """Display table for the given language, or the selected one."""
        return self.resolver.resolve(language or self.languages.current_language())

    def close(self) -> None:
        self.controller.shutdown()


def _setting(config: dict, name: str, default=None):
    if name in config:
        return config[name]
    return os.getenv(name, default)


def create_backend(config: dict = None) -> KeyValueBackend:
    """Pick the storage backend from TRANSLATION_STORE_BACKEND ('sql' or 'redis')."""
    config = config or {}
    kind = str(_setting(config, 'TRANSLATION_STORE_BACKEND', 'sql')).lower()

    if kind == 'redis':
        from physicshub.services.redis_client import get_redis

        client = get_redis(_setting(config, 'REDIS_URL'))
        if client is not None:
            return RedisKeyValueBackend(client)
        logger.warning('Redis backend requested but unavailable, using local SQL store')
    elif kind != 'sql':
        logger.warning(f"Unknown TRANSLATION_STORE_BACKEND '{kind}', using local SQL store")

    return SqlKeyValueBackend(_setting(config, 'TRANSLATION_STORE_URL', DEFAULT_STORE_URL))


def build_translation_context(config: dict = None, backend: KeyValueBackend = None, fetcher: TranslationFetcher = None, clock=None) -> TranslationContext:
    """Wire up one translation context.

    Values in config override the environment variables of the same name.
    """
    config = config or {}
    backend = backend or create_backend(config)

    if fetcher is None:
        fetcher = TranslationFetcher(
            url=_setting(config, 'TRANSLATIONS_URL', DEFAULT_TRANSLATIONS_URL),
            connect_timeout=float(_setting(config, 'TRANSLATIONS_CONNECT_TIMEOUT', 10)),
            read_timeout=float(_setting(config, 'TRANSLATIONS_READ_TIMEOUT', 10)),
        )

    cache_hours = float(_setting(config, 'TRANSLATION_CACHE_HOURS', 24))
    controller_kwargs = {
        'cache_duration_ms': int(cache_hours * 60 * 60 * 1000),
        'max_workers': int(_setting(config, 'TRANSLATION_WORKERS', 2)),
    }
    if clock is not None:
        controller_kwargs['clock'] = clock

    store = TranslationStore(backend)
    controller = TranslationCacheController(store, fetcher, **controller_kwargs)

    return TranslationContext(
        backend=backend,
        store=store,
        fetcher=fetcher,
        controller=controller,
        resolver=StringResolver(store),
        languages=LanguageManager(backend),
    )


__all__ = [
    'CACHE_DURATION_MS',
    'DEFAULT_STRINGS',
    'FetchError',
    'KeyValueBackend',
    'LanguageCode',
    'LanguageManager',
    'MalformedPayload',
    'NetworkUnavailable',
    'RedisKeyValueBackend',
    'ServerRejected',
    'SqlKeyValueBackend',
    'StoreError',
    'StringResolver',
    'StringTable',
    'TranslationBundle',
    'TranslationCacheController',
    'TranslationContext',
    'TranslationFetcher',
    'TranslationPair',
    'TranslationStore',
    'build_translation_context',
    'create_backend',
    'merge_tables',
]
