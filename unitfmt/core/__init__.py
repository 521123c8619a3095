"""
Core Module for unitfmt

Units registry, parser and converter, plus the exception hierarchy.
"""

from .exceptions import (
    UnitsError,
    ConversionError,
    UnknownUnitError,
    UnresolvableUnitError,
    UnmatchedParenthesisError,
    EmptySubexpressionError,
    FormattingError,
    ConfigurationError
)

__all__ = [
    'UnitsError',
    'ConversionError',
    'UnknownUnitError',
    'UnresolvableUnitError',
    'UnmatchedParenthesisError',
    'EmptySubexpressionError',
    'FormattingError',
    'ConfigurationError'
]
