"""
Latitude/Longitude Formatting

Angles arrive in internal units (radians) unless a unit is given, and are
rendered in degrees, either as degrees-minutes-seconds or as decimal degrees
with a hemisphere letter.
"""

import math
from typing import Optional

from ..core.exceptions import FormattingError
from ..core.units import QuantityConverter, get_default_converter

DMS_PRECISION = 1
DECIMAL_PRECISION = 4


def _to_degrees(value: float, unit: Optional[str], converter: Optional[QuantityConverter]) -> float:
    converter = converter or get_default_converter()
    internal = converter.to_internal(value, unit) if unit else value
    degrees = float(converter.from_internal(internal, 'deg'))
    if not math.isfinite(degrees):
        raise FormattingError("Angle must be finite", value)
    return degrees


def format_dms(degrees: float, precision: int = DMS_PRECISION) -> str:
    """
    Render a non-negative angle as degrees, minutes and seconds

    Rounding happens on the seconds so that 59.96" never shows up as 60.0".
    """
    scale = 10 ** precision
    total = round(abs(degrees) * 3600 * scale)
    whole_degrees, remainder = divmod(total, 3600 * scale)
    minutes, scaled_seconds = divmod(remainder, 60 * scale)

    width = 3 + precision if precision else 2
    seconds = f"{scaled_seconds / scale:0{width}.{precision}f}"
    return f"{whole_degrees}°{minutes:02d}'{seconds}\""


def _render(degrees: float, positive: str, negative: str, decimal: bool,
            precision: Optional[int]) -> str:
    hemisphere = positive if degrees >= 0 else negative
    if decimal:
        precision = DECIMAL_PRECISION if precision is None else precision
        return f"{abs(degrees):.{precision}f}°{hemisphere}"

    precision = DMS_PRECISION if precision is None else precision
    return f"{format_dms(degrees, precision)}{hemisphere}"


def format_latitude(value: float, unit: str = None, converter: QuantityConverter = None,
                    decimal: bool = False, precision: int = None) -> str:
    """
    Render a latitude, e.g. 52°31'12.0"N

    Args:
        value: Latitude in internal units, or in `unit` when given
        unit: Unit of `value` (e.g. 'deg'); None means internal units
        converter: Converter to use (default converter if None)
        decimal: Decimal degrees instead of degrees-minutes-seconds
        precision: Decimals of the seconds (DMS) or of the degrees (decimal)

    Raises:
        FormattingError: If the latitude lies outside [-90°, 90°]
    """
    degrees = _to_degrees(value, unit, converter)
    if abs(degrees) > 90.0 + 1e-9:
        raise FormattingError(f"Latitude must lie within ±90°, got {degrees}°", value)

    return _render(degrees, 'N', 'S', decimal, precision)


def format_longitude(value: float, unit: str = None, converter: QuantityConverter = None,
                     decimal: bool = False, precision: int = None) -> str:
    """Render a longitude normalized to (-180°, 180°], e.g. 13°24'18.0"E"""
    degrees = _to_degrees(value, unit, converter)
    degrees = (degrees + 180.0) % 360.0 - 180.0
    if degrees == -180.0:
        degrees = 180.0

    return _render(degrees, 'E', 'W', decimal, precision)


def format_lat_lon(latitude: float, longitude: float, unit: str = None,
                   converter: QuantityConverter = None, decimal: bool = False,
                   precision: int = None) -> str:
    """Render a latitude/longitude pair separated by a space"""
    return " ".join([
        format_latitude(latitude, unit, converter, decimal, precision),
        format_longitude(longitude, unit, converter, decimal, precision),
    ])
