"""Database models for the translation server."""

from .translation import Translation

__all__ = ['Translation']
