"""Web API for importing, reviewing and studying questions."""

from .app import create_app

__all__ = [
    'create_app'
]
