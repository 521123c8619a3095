"""
unitfmt

Unit registry, compound unit parsing, quantity conversion and display
formatting.
"""

__version__ = "1.0.0"

# Core imports for public API
from .core.exceptions import (
    UnitsError,
    ConversionError,
    UnknownUnitError,
    UnresolvableUnitError,
    UnmatchedParenthesisError,
    EmptySubexpressionError,
    FormattingError,
    ConfigurationError
)
from .core.units import (
    QuantityConverter,
    UnitRegistry,
    UnitDefinition,
    NonlinearUnit,
    UnitType,
    get_default_registry,
    set_default_registry,
    get_default_converter,
    parse_compound_unit,
    to_internal,
    from_internal,
    is_valid_unit,
    convert_value
)
from .config.settings import UnitSettings

# Formatting
from .formatting import (
    format_number,
    format_scientific,
    format_si,
    format_named,
    format_quantity,
    format_latitude,
    format_longitude,
    format_lat_lon
)

# Infrastructure
from .infrastructure.logging.unit_logger import setup_logging, get_logger

__all__ = [
    # Core classes
    'QuantityConverter', 'UnitRegistry', 'UnitDefinition', 'NonlinearUnit', 'UnitType',
    'UnitSettings',

    # Errors
    'UnitsError', 'ConversionError', 'UnknownUnitError', 'UnresolvableUnitError',
    'UnmatchedParenthesisError', 'EmptySubexpressionError', 'FormattingError',
    'ConfigurationError',

    # Convenience functions
    'get_default_registry', 'set_default_registry', 'get_default_converter',
    'parse_compound_unit', 'to_internal', 'from_internal', 'is_valid_unit', 'convert_value',
    'format_number', 'format_scientific', 'format_si', 'format_named', 'format_quantity',
    'format_latitude', 'format_longitude', 'format_lat_lon',
    'setup_logging', 'get_logger',

    # Version info
    '__version__'
]
