"""Durable storage for cached translations.

The store sits on a small key-value backend so the same bundle layout works
on a local SQLite file (default) or a shared Redis instance:

- english_translations: JSON-encoded StringTable for EN
- vietnamese_translations: JSON-encoded StringTable for VN
- last_fetch_time: decimal string of epoch milliseconds
"""

import logging
import threading

import redis
from sqlalchemy import Column, MetaData, String, Table, Text, create_engine, delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from physicshub.constants import LanguageCode
from physicshub.language.tables import StringTable, TranslationBundle

logger = logging.getLogger(__name__)

ENGLISH_TRANSLATIONS = 'english_translations'
VIETNAMESE_TRANSLATIONS = 'vietnamese_translations'
LAST_FETCH_TIME = 'last_fetch_time'

BUNDLE_KEYS = (ENGLISH_TRANSLATIONS, VIETNAMESE_TRANSLATIONS, LAST_FETCH_TIME)

TABLE_KEYS = {
    LanguageCode.EN: ENGLISH_TRANSLATIONS,
    LanguageCode.VN: VIETNAMESE_TRANSLATIONS,
}

DEFAULT_STORE_URL = 'sqlite:///physicshub_client.db'


class StoreError(Exception):
    """The persistence layer could not be read or written."""


class KeyValueBackend:
    """Minimal persistent key-value interface.

    Each call is atomic: a write_many either stores every pair or none.
    """

    def read_many(self, keys) -> dict:
        raise NotImplementedError

    def write_many(self, mapping: dict) -> None:
        raise NotImplementedError

    def delete_many(self, keys) -> None:
        raise NotImplementedError


metadata = MetaData()

preferences_table = Table(
    'preferences',
    metadata,
    Column('key', String(100), primary_key=True),
    Column('value', Text, nullable=False),
)


class SqlKeyValueBackend(KeyValueBackend):
    """Key-value pairs in a single SQL table, one transaction per write."""

    def __init__(self, url: str = DEFAULT_STORE_URL, engine=None):
        if engine is None:
            if url in ('sqlite://', 'sqlite:///:memory:'):
                # One shared connection, otherwise every thread sees its own empty database
                engine = create_engine(
                    url,
                    connect_args={'check_same_thread': False},
                    poolclass=StaticPool,
                )
            else:
                engine = create_engine(url)
        self.engine = engine
        self._prepared = False

        try:
            self._prepare()
        except StoreError as e:
            # Reads and writes retry, and raise StoreError while the location stays unusable
            logger.warning(f'Translation store not ready, serving defaults until it is: {e}')

    def _prepare(self) -> None:
        if self._prepared:
            return
        try:
            metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StoreError(f'Could not prepare preferences table: {e}') from e
        self._prepared = True

    def read_many(self, keys) -> dict:
        keys = list(keys)
        self._prepare()
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(
                    select(preferences_table.c.key, preferences_table.c.value)
                    .where(preferences_table.c.key.in_(keys))
                ).all()
        except SQLAlchemyError as e:
            raise StoreError(f'Read failed: {e}') from e
        return {key: value for key, value in rows}

    def write_many(self, mapping: dict) -> None:
        if not mapping:
            return
        self._prepare()
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    delete(preferences_table).where(preferences_table.c.key.in_(list(mapping)))
                )
                conn.execute(
                    insert(preferences_table),
                    [{'key': key, 'value': value} for key, value in mapping.items()],
                )
        except SQLAlchemyError as e:
            raise StoreError(f'Write failed: {e}') from e

    def delete_many(self, keys) -> None:
        self._prepare()
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    delete(preferences_table).where(preferences_table.c.key.in_(list(keys)))
                )
        except SQLAlchemyError as e:
            raise StoreError(f'Delete failed: {e}') from e

    def __repr__(self):
        return f'<SqlKeyValueBackend {self.engine.url}>'


class RedisKeyValueBackend(KeyValueBackend):
    """Key-value pairs in Redis under a common prefix.

    Writes go through a MULTI/EXEC pipeline so readers never observe half of a
    bundle.
    """

    def __init__(self, client, prefix: str = 'physicshub:'):
        self.client = client
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f'{self.prefix}{key}'

    def read_many(self, keys) -> dict:
        keys = list(keys)
        try:
            values = self.client.mget([self._key(key) for key in keys])
        except redis.RedisError as e:
            raise StoreError(f'Redis read failed: {e}') from e

        result = {}
        for key, value in zip(keys, values):
            if value is None:
                continue
            if isinstance(value, bytes):
                value = value.decode('utf-8')
            result[key] = value
        return result

    def write_many(self, mapping: dict) -> None:
        if not mapping:
            return
        try:
            pipe = self.client.pipeline(transaction=True)
            for key, value in mapping.items():
                pipe.set(self._key(key), value)
            pipe.execute()
        except redis.RedisError as e:
            raise StoreError(f'Redis write failed: {e}') from e

    def delete_many(self, keys) -> None:
        keys = [self._key(key) for key in keys]
        if not keys:
            return
        try:
            self.client.delete(*keys)
        except redis.RedisError as e:
            raise StoreError(f'Redis delete failed: {e}') from e

    def __repr__(self):
        return f'<RedisKeyValueBackend prefix={self.prefix!r}>'


class TranslationStore:
    """Sole owner of the persisted TranslationBundle.

    Reads never raise: anything unreadable is reported as "nothing cached".
    commit() and clear() hold a lock so two writers never interleave.
    """

    def __init__(self, backend: KeyValueBackend):
        self.backend = backend
        self._lock = threading.Lock()

    def get_cached(self, language: LanguageCode) -> StringTable:
        """Return the cached table for a language, all-empty if there is none."""
        key = TABLE_KEYS[language]
        try:
            values = self.backend.read_many([key])
        except StoreError as e:
            logger.warning(f'Translation cache unavailable, treating as empty: {e}')
            return StringTable.empty()
        return self._decode_table(key, values.get(key))

    def get_last_fetch_timestamp(self) -> int:
        try:
            values = self.backend.read_many([LAST_FETCH_TIME])
        except StoreError as e:
            logger.warning(f'Translation cache unavailable, treating as never fetched: {e}')
            return 0
        return self._decode_timestamp(values.get(LAST_FETCH_TIME))

    def get_bundle(self) -> TranslationBundle:
        """Read both tables and the timestamp in one backend call."""
        try:
            values = self.backend.read_many(BUNDLE_KEYS)
        except StoreError as e:
            logger.warning(f'Translation cache unavailable, treating as empty: {e}')
            return TranslationBundle.empty()

        return TranslationBundle(
            en=self._decode_table(ENGLISH_TRANSLATIONS, values.get(ENGLISH_TRANSLATIONS)),
            vn=self._decode_table(VIETNAMESE_TRANSLATIONS, values.get(VIETNAMESE_TRANSLATIONS)),
            last_fetch_timestamp=self._decode_timestamp(values.get(LAST_FETCH_TIME)),
        )

    def commit(self, en: StringTable, vn: StringTable, timestamp: int) -> TranslationBundle:
        """Atomically replace both tables and the fetch time.

        Raises StoreError if the backend rejects the write; in that case
        nothing was stored.
        """
        timestamp = int(timestamp)
        with self._lock:
            self.backend.write_many({
                ENGLISH_TRANSLATIONS: en.to_json(),
                VIETNAMESE_TRANSLATIONS: vn.to_json(),
                LAST_FETCH_TIME: str(timestamp),
            })
        logger.info(f'Translations cached (last_fetch_time={timestamp})')
        return TranslationBundle(en=en, vn=vn, last_fetch_timestamp=timestamp)

    def clear(self) -> None:
        """Forget everything cached; the next freshness check will fetch."""
        with self._lock:
            self.backend.delete_many(BUNDLE_KEYS)
        logger.info('Translation cache cleared')

    def _decode_table(self, key: str, raw) -> StringTable:
        if raw is None:
            return StringTable.empty()
        try:
            return StringTable.from_json(raw)
        except ValueError as e:
            logger.warning(f'Ignoring corrupt cached {key}: {e}')
            return StringTable.empty()

    def _decode_timestamp(self, raw) -> int:
        if raw is None:
            return 0
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning(f'Ignoring corrupt {LAST_FETCH_TIME}: {raw!r}')
            return 0
