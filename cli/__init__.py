"""CLI package for the OAuth token exchange proxy"""

from .main import main

__all__ = ['main']
