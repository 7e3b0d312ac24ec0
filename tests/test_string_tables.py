"""Tests for StringTable, TranslationPair and the language constants."""
import pytest

from physicshub.constants import STRING_KEYS, LanguageCode, normalize_language, parse_language
from physicshub.language import DEFAULT_STRINGS, StringTable, TranslationPair


class TestStringTable:

    def test_empty_table_has_every_key_blank(self):
        table = StringTable.empty()
        assert list(table) == list(STRING_KEYS)
        assert all(table[key] == '' for key in STRING_KEYS)
        assert table.missing_keys() == list(STRING_KEYS)

    def test_absent_keys_become_empty_and_unknown_keys_are_dropped(self):
        table = StringTable.from_dict({'hello': 'Hi', 'notAKey': 'ignored'})
        assert table['hello'] == 'Hi'
        assert table['back'] == ''
        assert 'notAKey' not in table.to_dict()

    def test_non_string_value_is_rejected(self):
        with pytest.raises(ValueError):
            StringTable.from_dict({'hello': 42})

    def test_non_object_is_rejected(self):
        with pytest.raises(ValueError):
            StringTable.from_dict(['hello'])

    def test_json_round_trip_keeps_unicode(self):
        table = StringTable({'back': 'Quay lại', 'hello': 'Xin chào,'})
        raw = table.to_json()
        assert 'Quay lại' in raw
        assert StringTable.from_json(raw) == table

    def test_invalid_json_is_rejected(self):
        with pytest.raises(ValueError):
            StringTable.from_json('{not json')

    def test_with_value_returns_copy(self):
        table = StringTable({'hello': 'Hi'})
        changed = table.with_value('hello', 'Hey')
        assert table['hello'] == 'Hi'
        assert changed['hello'] == 'Hey'

    def test_with_value_unknown_key(self):
        with pytest.raises(KeyError):
            StringTable.empty().with_value('nope', 'x')

    def test_attribute_access(self):
        table = StringTable({'noticeBoard': 'NOTICE BOARD'})
        assert table.noticeBoard == 'NOTICE BOARD'
        with pytest.raises(AttributeError):
            table.notAKey


class TestDefaults:

    @pytest.mark.parametrize('language', list(LanguageCode))
    def test_defaults_are_complete(self, language):
        table = DEFAULT_STRINGS[language]
        assert table.is_complete()
        assert all(table[key].strip() for key in STRING_KEYS)

    def test_known_default_values(self):
        assert DEFAULT_STRINGS[LanguageCode.EN]['hello'] == 'Hello,'
        assert DEFAULT_STRINGS[LanguageCode.VN]['back'] == 'Quay lại'


class TestTranslationPair:

    def test_missing_language_object_is_empty_table(self):
        pair = TranslationPair.from_dict({'en': {'hello': 'Hi'}})
        assert pair.en['hello'] == 'Hi'
        assert pair.vn == StringTable.empty()

    def test_language_must_be_object(self):
        with pytest.raises(ValueError):
            TranslationPair.from_dict({'en': 'hello', 'vn': {}})

    def test_for_language(self):
        pair = TranslationPair(en=StringTable({'back': 'Back'}), vn=StringTable({'back': 'Quay lại'}))
        assert pair.for_language(LanguageCode.VN)['back'] == 'Quay lại'
        assert pair.to_dict()['en']['back'] == 'Back'


class TestLanguageCodes:

    @pytest.mark.parametrize('code,expected', [
        ('en', LanguageCode.EN),
        ('EN', LanguageCode.EN),
        (' vn ', LanguageCode.VN),
        ('vi', LanguageCode.VN),
        (LanguageCode.VN, LanguageCode.VN),
    ])
    def test_normalize(self, code, expected):
        assert normalize_language(code) == expected

    def test_unknown_code(self):
        assert normalize_language('fr') is None
        with pytest.raises(ValueError):
            parse_language('fr')
