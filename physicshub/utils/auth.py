"""Shared authentication utilities.

Write access to the translation endpoints is protected by a shared admin
secret sent in the X-Admin-Secret header.
"""

from functools import wraps
from flask import request, jsonify, current_app
import hmac


def check_admin_secret() -> bool:
    """Check if request has valid admin secret via header only.

    Uses hmac.compare_digest for timing-safe comparison. Returns False when
    ADMIN_SECRET is not configured, which disables write endpoints.
    """
    admin_secret = current_app.config.get('ADMIN_SECRET')
    if not admin_secret:
        return False
    secret = request.headers.get('X-Admin-Secret', '')
    return hmac.compare_digest(secret.encode('utf-8'), admin_secret.encode('utf-8'))


def admin_secret_required(f):
    """
    Decorator to require the admin secret.

    Usage:
        @bp.route('/translations', methods=['PUT'])
        @admin_secret_required
        def update_translations():
            ...
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        if not check_admin_secret():
            return jsonify({'success': False, 'message': 'Admin access required'}), 403
        return f(*args, **kwargs)
    return decorated
