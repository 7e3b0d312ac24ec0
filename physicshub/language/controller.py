"""Decides when cached translations need refreshing and coordinates fetch -> commit."""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, Tuple

from physicshub.language.fetcher import FetchError, TranslationFetcher
from physicshub.language.store import StoreError, TranslationStore
from physicshub.language.tables import StringTable, TranslationBundle

logger = logging.getLogger(__name__)

CACHE_DURATION_MS = 24 * 60 * 60 * 1000  # 24 hours


def current_time_millis() -> int:
    return int(time.time() * 1000)


class TranslationCacheController:
    """Keeps the translation cache fresh.

    Order within one ensure_fresh call is always: staleness read, fetch,
    commit. Concurrent calls fetch independently and the store serializes
    their commits (last writer wins).
    """

    def __init__(
        self,
        store: TranslationStore,
        fetcher: TranslationFetcher,
        cache_duration_ms: int = CACHE_DURATION_MS,
        clock: Callable[[], int] = current_time_millis,
        max_workers: int = 2,
    ):
        self.store = store
        self.fetcher = fetcher
        self.cache_duration_ms = cache_duration_ms
        self.clock = clock
        self.max_workers = max_workers
        self._executor = None
        self._executor_lock = threading.Lock()
        self._listeners = []

    def is_stale(self) -> bool:
        last_fetch = self.store.get_last_fetch_timestamp()
        return (self.clock() - last_fetch) > self.cache_duration_ms

    def ensure_fresh(self, force_refresh: bool = False) -> Tuple[bool, Optional[FetchError]]:
        """Fetch and cache translations unless the cache is still fresh.

        Returns:
            Tuple of (success, error)
            Cache hit or successful refresh: (True, None)
            Fetch failed: (False, FetchError), the cache is left untouched
            Commit failed: (False, None)
        """
        if not force_refresh and not self.is_stale():
            logger.debug('Using cached translations')
            return True, None

        translations, error = self.fetcher.fetch_remote()
        if error is not None:
            logger.warning(f'Failed to fetch translations ({error.code}), keeping cached/default strings')
            return False, error

        try:
            bundle = self.store.commit(translations.en, translations.vn, self.clock())
        except StoreError as e:
            logger.error(f'Could not cache fetched translations: {e}')
            return False, None

        self._notify(bundle)
        return True, None

    def ensure_fresh_async(self, force_refresh: bool = False) -> Future:
        """Run ensure_fresh on a worker thread.

        Dropping the returned future does not cancel the work; the fetch still
        completes and commits.
        """
        return self._get_executor().submit(self.ensure_fresh, force_refresh)

    def save_manually(self, en: StringTable, vn: StringTable) -> Tuple[Optional[TranslationBundle], Optional[StoreError]]:
        """Cache tables that did not come from the remote source (admin edits).

        Returns:
            Tuple of (bundle, error)
            If saved: (TranslationBundle, None)
            If the store rejected the write: (None, StoreError)
        """
        try:
            bundle = self.store.commit(en, vn, self.clock())
        except StoreError as e:
            logger.error(f'Could not save translations manually: {e}')
            return None, e

        self._notify(bundle)
        return bundle, None

    def clear_cache(self) -> bool:
        """Forget cached translations. False if the store could not be cleared."""
        try:
            self.store.clear()
        except StoreError as e:
            logger.error(f'Could not clear translation cache: {e}')
            return False
        return True

    def subscribe(self, listener: Callable[[TranslationBundle], None]) -> None:
        """Call listener with the new bundle after every successful commit."""
        self._listeners.append(listener)

    def unsubscribe(self, listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def shutdown(self, wait: bool = True) -> None:
        with self._executor_lock:
            if self._executor is not None:
                self._executor.shutdown(wait=wait)
                self._executor = None

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix='translations',
                )
            return self._executor

    def _notify(self, bundle: TranslationBundle) -> None:
        for listener in list(self._listeners):
            try:
                listener(bundle)
            except Exception as e:
                logger.error(f'Translation listener {listener!r} failed: {e}')
