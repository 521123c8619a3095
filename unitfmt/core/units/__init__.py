"""
Units Module for unitfmt

Unit registry, compound unit parser and quantity converter.
"""

from .converter import QuantityConverter
from .definitions import (
    NONLINEAR_UNIT_DEFINITIONS,
    SI_UNIT_DEFINITIONS,
    NonlinearUnit,
    UnitDefinition,
    UnitType,
    get_unit_info,
    list_units_by_type
)
from .parser import parse_compound_unit, evaluate_unit_expression
from .registry import UnitRegistry, get_default_registry, set_default_registry

_default_converter = None


def get_default_converter() -> QuantityConverter:
    """Converter bound to the process-wide registry"""
    global _default_converter
    if _default_converter is None or _default_converter.registry is not get_default_registry():
        _default_converter = QuantityConverter(get_default_registry())
    return _default_converter


# Convenience functions using the default converter
def to_internal(value, unit, parse_compound=True, memoize=True, fail_loud=True):
    """Convert value from an external unit to internal units"""
    return get_default_converter().to_internal(value, unit, parse_compound, memoize, fail_loud)


def from_internal(value, unit, parse_compound=True, memoize=True, fail_loud=True):
    """Convert value from internal units to an external unit"""
    return get_default_converter().from_internal(value, unit, parse_compound, memoize, fail_loud)


def is_valid_unit(unit, parse_compound=True):
    """Check whether a unit string can be converted"""
    return get_default_converter().is_valid_unit(unit, parse_compound)


def convert_value(value, from_unit, to_unit):
    """Convert value between arbitrary units"""
    return get_default_converter().convert(value, from_unit, to_unit)


__all__ = [
    'QuantityConverter',
    'UnitRegistry',
    'UnitDefinition',
    'NonlinearUnit',
    'UnitType',
    'SI_UNIT_DEFINITIONS',
    'NONLINEAR_UNIT_DEFINITIONS',
    'get_unit_info',
    'list_units_by_type',
    'get_default_registry',
    'set_default_registry',
    'get_default_converter',
    'parse_compound_unit',
    'evaluate_unit_expression',
    'to_internal',
    'from_internal',
    'is_valid_unit',
    'convert_value'
]
