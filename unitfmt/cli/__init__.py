"""Command line interface for unitfmt"""

from .main import cli, main

__all__ = ['cli', 'main']
