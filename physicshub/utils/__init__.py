"""Shared utilities for the translation server."""

from physicshub.utils.auth import admin_secret_required, check_admin_secret

__all__ = [
    'admin_secret_required',
    'check_admin_secret',
]
