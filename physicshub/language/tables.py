"""String tables and the compiled-in defaults they fall back to."""

import json
from dataclasses import dataclass

from physicshub.constants import (
    STRING_KEYS,
    DEFAULT_ENGLISH,
    DEFAULT_VIETNAMESE,
    LanguageCode,
)


class StringTable:
    """Immutable mapping from every known UI key to its text.

    An empty string means "not translated yet". Keys outside STRING_KEYS
    are never stored.
    """

    __slots__ = ('_values',)

    def __init__(self, values: dict | None = None):
        values = values or {}
        self._values = {key: values.get(key, '') for key in STRING_KEYS}

    @classmethod
    def empty(cls) -> 'StringTable':
        return cls()

    @classmethod
    def from_dict(cls, data) -> 'StringTable':
        """Build a table from decoded JSON.

        Absent keys become empty strings and unknown keys are ignored.
        Raises ValueError when data is not an object or a known key holds
        something other than a string.
        """
        if not isinstance(data, dict):
            raise ValueError(f'Expected an object, got {type(data).__name__}')

        for key in STRING_KEYS:
            if key in data and not isinstance(data[key], str):
                raise ValueError(f"Value for '{key}' must be a string")

        return cls(data)

    @classmethod
    def from_json(cls, raw: str) -> 'StringTable':
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            raise ValueError(f'Invalid JSON: {e}') from e
        return cls.from_dict(data)

    def to_dict(self) -> dict:
        return dict(self._values)

    def to_json(self) -> str:
        return json.dumps(self._values, ensure_ascii=False)

    def with_value(self, key: str, value: str) -> 'StringTable':
        """Return a copy with a single key replaced."""
        if key not in self._values:
            raise KeyError(key)
        values = dict(self._values)
        values[key] = value
        return StringTable(values)

    def missing_keys(self) -> list:
        """Keys that are still empty."""
        return [key for key in STRING_KEYS if not self._values[key]]

    def is_complete(self) -> bool:
        return not self.missing_keys()

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __getattr__(self, key: str) -> str:
        # Lets presentation code write table.noticeBoard
        if key.startswith('_'):
            raise AttributeError(key)
        try:
            return self._values[key]
        except KeyError:
            raise AttributeError(key) from None

    def __iter__(self):
        return iter(STRING_KEYS)

    def __len__(self):
        return len(STRING_KEYS)

    def __eq__(self, other):
        if not isinstance(other, StringTable):
            return NotImplemented
        return self._values == other._values

    def __hash__(self):
        return hash(tuple(self._values[key] for key in STRING_KEYS))

    def __repr__(self):
        filled = len(STRING_KEYS) - len(self.missing_keys())
        return f'<StringTable {filled}/{len(STRING_KEYS)} filled>'


@dataclass(frozen=True)
class TranslationPair:
    """One table per language, as served by the translations endpoint."""

    en: StringTable
    vn: StringTable

    def for_language(self, language: LanguageCode) -> StringTable:
        return self.en if language == LanguageCode.EN else self.vn

    def to_dict(self) -> dict:
        return {'en': self.en.to_dict(), 'vn': self.vn.to_dict()}

    @classmethod
    def from_dict(cls, data) -> 'TranslationPair':
        """Decode a {"en": {...}, "vn": {...}} payload.

        A missing language object is treated as an all-empty table.
        """
        if not isinstance(data, dict):
            raise ValueError(f'Expected an object, got {type(data).__name__}')
        return cls(
            en=StringTable.from_dict(data.get('en', {})),
            vn=StringTable.from_dict(data.get('vn', {})),
        )


@dataclass(frozen=True)
class TranslationBundle:
    """Everything the store persists: both cached tables and the fetch time."""

    en: StringTable
    vn: StringTable
    last_fetch_timestamp: int = 0

    @classmethod
    def empty(cls) -> 'TranslationBundle':
        return cls(StringTable.empty(), StringTable.empty(), 0)

    def for_language(self, language: LanguageCode) -> StringTable:
        return self.en if language == LanguageCode.EN else self.vn


DEFAULT_STRINGS = {
    LanguageCode.EN: StringTable(DEFAULT_ENGLISH),
    LanguageCode.VN: StringTable(DEFAULT_VIETNAMESE),
}

for _language, _table in DEFAULT_STRINGS.items():
    if not _table.is_complete():
        raise RuntimeError(
            f'Default {_language.name} strings missing: {", ".join(_table.missing_keys())}'
        )
