"""Translation service: read and edit the UI strings served to clients.

The table is seeded with the compiled-in defaults the first time it is read,
so a fresh server always answers with complete strings.
"""
import logging

from sqlalchemy.exc import IntegrityError

from physicshub import db
from physicshub.constants import STRING_KEYS, LanguageCode, normalize_language
from physicshub.language.tables import DEFAULT_STRINGS, StringTable, TranslationPair
from physicshub.models import Translation

logger = logging.getLogger(__name__)


def ensure_seeded() -> int:
    """Insert default rows for any (language, key) not in the table yet.

    Returns the number of rows created. Losing a race with another request
    seeding at the same time is harmless: that request already wrote the rows.
    """
    existing = _existing_keys()

    created = 0
    for language, table in DEFAULT_STRINGS.items():
        for key in STRING_KEYS:
            if (language.value, key) in existing:
                continue
            db.session.add(Translation(language=language.value, key=key, value=table[key]))
            created += 1

    if created:
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            logger.info("Default translations already seeded by another request")
            return 0
        logger.info(f"Seeded {created} default translations")
    return created


def _existing_keys() -> set:
    return {
        (row.language, row.key)
        for row in db.session.query(Translation.language, Translation.key).all()
    }


def _load_table(language: LanguageCode) -> StringTable:
    rows = Translation.query.filter_by(language=language.value).all()
    return StringTable({row.key: row.value for row in rows})


def _store_table(language: LanguageCode, table: StringTable):
    """Write every key of table for language. Caller commits."""
    rows = {
        row.key: row
        for row in Translation.query.filter_by(language=language.value).all()
    }
    for key in STRING_KEYS:
        row = rows.get(key)
        if row is None:
            db.session.add(Translation(language=language.value, key=key, value=table[key]))
        elif row.value != table[key]:
            row.value = table[key]


def get_all_translations() -> TranslationPair:
    """Both tables, as served by GET /api/translations."""
    ensure_seeded()
    return TranslationPair(
        en=_load_table(LanguageCode.EN),
        vn=_load_table(LanguageCode.VN),
    )


def get_translations_by_language(language: str) -> StringTable | None:
    """One table, or None for an unknown language code."""
    code = normalize_language(language)
    if code is None:
        return None
    ensure_seeded()
    return _load_table(code)


def update_all_translations(translations: TranslationPair) -> TranslationPair:
    """Replace both tables in one transaction."""
    ensure_seeded()
    try:
        _store_table(LanguageCode.EN, translations.en)
        _store_table(LanguageCode.VN, translations.vn)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info("Replaced all translations")
    return get_all_translations()


def update_language_translations(language: str, strings: StringTable) -> bool:
    """Replace one language's table. False for an unknown language."""
    code = normalize_language(language)
    if code is None:
        return False

    ensure_seeded()
    try:
        _store_table(code, strings)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Replaced {code.name} translations")
    return True


def update_translation(language: str, key: str, value: str) -> bool:
    """Change a single string. False for an unknown language or key."""
    code = normalize_language(language)
    if code is None or key not in STRING_KEYS:
        return False

    ensure_seeded()
    row = Translation.query.filter_by(language=code.value, key=key).first()
    try:
        if row is None:
            db.session.add(Translation(language=code.value, key=key, value=value))
        else:
            row.value = value
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Updated translation {code.value}.{key}")
    return True
