"""Translation routes: the remote source clients fetch UI strings from."""

from flask import Blueprint, request, jsonify
from physicshub.language.tables import StringTable, TranslationPair
from physicshub.services.translation import (
    get_all_translations,
    get_translations_by_language,
    update_all_translations,
    update_language_translations,
    update_translation,
)
from physicshub.utils import admin_secret_required
import logging

logger = logging.getLogger(__name__)

translations_bp = Blueprint('translations', __name__)


@translations_bp.route('/translations', methods=['GET'])
def get_translations():
    """Get both string tables.

    Response: {"en": {<key>: <text>, ...}, "vn": {...}}
    """
    try:
        return jsonify(get_all_translations().to_dict()), 200
    except Exception as e:
        logger.error(f"Error loading translations: {e}")
        return jsonify({'error': 'Could not load translations'}), 500


@translations_bp.route('/translations/<language>', methods=['GET'])
def get_language_translations(language):
    """Get one language's string table ('en', 'vn' or 'vi')."""
    try:
        strings = get_translations_by_language(language)
    except Exception as e:
        logger.error(f"Error loading {language} translations: {e}")
        return jsonify({'error': 'Could not load translations'}), 500

    if strings is None:
        return jsonify({'error': f"Unknown language '{language}'"}), 404
    return jsonify(strings.to_dict()), 200


@translations_bp.route('/translations', methods=['PUT'])
@admin_secret_required
def replace_translations():
    """Replace both string tables. Keys missing from the body become empty."""
    data = request.get_json(silent=True)
    try:
        translations = TranslationPair.from_dict(data)
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400

    try:
        updated = update_all_translations(translations)
    except Exception as e:
        logger.error(f"Error replacing translations: {e}")
        return jsonify({'success': False, 'message': 'Could not save translations'}), 500
    return jsonify(updated.to_dict()), 200


@translations_bp.route('/translations/<language>', methods=['PUT'])
@admin_secret_required
def replace_language_translations(language):
    """Replace one language's string table."""
    data = request.get_json(silent=True)
    try:
        strings = StringTable.from_dict(data)
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400

    try:
        success = update_language_translations(language, strings)
    except Exception as e:
        logger.error(f"Error replacing {language} translations: {e}")
        return jsonify({'success': False, 'message': 'Could not save translations'}), 500

    if not success:
        return jsonify({'success': False, 'message': 'Invalid language'}), 400
    return jsonify({'success': True, 'message': 'Translations updated'}), 200


@translations_bp.route('/translations', methods=['PATCH'])
@admin_secret_required
def patch_translation():
    """Change a single string.

    Body: {"language": "vn", "key": "back", "value": "Quay lại"}
    """
    data = request.get_json(silent=True) or {}
    language = data.get('language')
    key = data.get('key')
    value = data.get('value')

    if not isinstance(language, str) or not isinstance(key, str) or not isinstance(value, str):
        return jsonify({'success': False, 'message': 'language, key and value are required strings'}), 400

    try:
        success = update_translation(language, key, value)
    except Exception as e:
        logger.error(f"Error updating translation {language}.{key}: {e}")
        return jsonify({'success': False, 'message': 'Could not save translation'}), 500

    if not success:
        return jsonify({'success': False, 'message': 'Invalid language or key'}), 400
    return jsonify({'success': True, 'message': 'Translation updated'}), 200


@translations_bp.route('/health', methods=['GET'])
def health_check():
    return jsonify({'status': 'OK', 'service': 'PhysicsHub Translation API'}), 200
