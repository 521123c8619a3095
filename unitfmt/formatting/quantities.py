"""Rendering of internal-unit quantities in a chosen display unit"""

import math
from typing import Optional

from ..core.exceptions import FormattingError
from ..core.units import QuantityConverter, get_default_converter
from .numbers import ASCII_MICRO, SI_PREFIXES, format_named, format_number, format_scientific, format_si

STYLES = ('plain', 'scientific', 'si', 'named')

# Characters that make a unit string a compound expression
_COMPOUND_MARKERS = set(' /^()')


def format_quantity(value: float, unit: Optional[str], converter: QuantityConverter = None,
                    style: str = 'plain', digits: int = 3, unicode: bool = False) -> str:
    """
    Convert an internal value to `unit` and render it

    Args:
        value: Value in internal units
        unit: Display unit (linear, nonlinear or compound); empty for none.
            The 'si' style needs a single linear symbol and renders in its
            unprefixed form ('km' becomes 'm' with a fresh prefix).
        converter: Converter to use (default converter if None)
        style: One of 'plain', 'scientific', 'si', 'named'
        digits: Significant digits
        unicode: Unicode exponent/micro sign where the style has one

    Returns:
        Display string, e.g. '1.5 km', '1.99e30 kg', '1.5 Gm'

    Raises:
        FormattingError: If the style is unknown, or the 'si' style is asked
            for a compound or nonlinear unit
        ConversionError: If the unit cannot be resolved
    """
    if style not in STYLES:
        raise FormattingError(f"Unknown format style '{style}', expected one of {STYLES}", style)

    converter = converter or get_default_converter()
    unit = unit or ''

    if style == 'si':
        base = si_base_unit(unit, converter)
        external = float(converter.from_internal(value, base))
        return format_si(external, base, digits, unicode=unicode)

    external = float(converter.from_internal(value, unit))

    if style == 'scientific':
        text = format_scientific(external, digits, unicode=unicode)
    elif style == 'named':
        text = format_named(external, digits)
    else:
        text = format_number(external, digits)

    return f"{text} {unit}" if unit else text


def si_base_unit(unit: str, converter: QuantityConverter) -> str:
    """
    Unprefixed symbol an SI prefix can be attached to

    A leading prefix is stripped only when the remainder is registered and
    the two multipliers differ by exactly that prefix, so 'min', 'mol' and
    'Pa' stay as they are while 'km', 'µs' and 'Gyr' reduce to 'm', 's' and
    'yr'.

    Raises:
        FormattingError: If `unit` is compound or nonlinear
    """
    if not unit:
        return unit

    if _COMPOUND_MARKERS.intersection(unit):
        raise FormattingError(f"SI prefixes need a single unit symbol, got '{unit}'", unit)

    registry = converter.registry
    if registry.lookup_nonlinear(unit) is not None:
        raise FormattingError(f"SI prefixes cannot be applied to nonlinear unit '{unit}'", unit)

    multiplier = registry.lookup_linear(unit)
    if multiplier is None:
        return unit

    for exponent, prefix in SI_PREFIXES.items():
        symbols = (prefix, ASCII_MICRO) if prefix == 'µ' else (prefix,)
        for symbol in symbols:
            if not symbol or not unit.startswith(symbol) or len(unit) == len(symbol):
                continue
            base = unit[len(symbol):]
            base_multiplier = registry.lookup_linear(base)
            if base_multiplier is not None and math.isclose(
                    multiplier, base_multiplier * 10.0 ** exponent, rel_tol=1e-9):
                return base

    return unit
