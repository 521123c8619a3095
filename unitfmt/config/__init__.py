"""Configuration for unitfmt"""

from .settings import UnitSettings

__all__ = ['UnitSettings']
