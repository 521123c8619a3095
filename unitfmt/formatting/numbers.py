"""
Number Formatting

Significant-digit rounding and human-readable renderings of plain numbers:
fixed notation, scientific notation, SI prefixes and named large numbers.
"""

import math
from typing import Dict, List, Tuple

from ..core.exceptions import FormattingError


# ===================================================================
# PREFIX AND NAME TABLES
# ===================================================================

SI_PREFIXES: Dict[int, str] = {
    -24: 'y',
    -21: 'z',
    -18: 'a',
    -15: 'f',
    -12: 'p',
    -9: 'n',
    -6: 'µ',
    -3: 'm',
    0: '',
    3: 'k',
    6: 'M',
    9: 'G',
    12: 'T',
    15: 'P',
    18: 'E',
    21: 'Z',
    24: 'Y',
}

ASCII_MICRO = 'u'

LARGE_NUMBER_NAMES: List[Tuple[int, str]] = [
    (3, 'thousand'),
    (6, 'million'),
    (9, 'billion'),
    (12, 'trillion'),
    (15, 'quadrillion'),
    (18, 'quintillion'),
    (21, 'sextillion'),
    (24, 'septillion'),
    (27, 'octillion'),
    (30, 'nonillion'),
    (33, 'decillion'),
]

_SUPERSCRIPTS = str.maketrans('0123456789-', '⁰¹²³⁴⁵⁶⁷⁸⁹⁻')


# ===================================================================
# ROUNDING
# ===================================================================

def decimal_exponent(x: float) -> int:
    """Power of ten of the leading digit of x (0 for x == 0)"""
    if x == 0:
        return 0
    return math.floor(math.log10(abs(x)))


def round_significant(x: float, digits: int = 3) -> float:
    """
    Round x to a number of significant digits

    Args:
        x: Value to round
        digits: Significant digits to keep (>= 1)

    Returns:
        Rounded value; zero, NaN and infinities are returned unchanged

    Raises:
        FormattingError: If digits is less than 1
    """
    if digits < 1:
        raise FormattingError(f"Significant digits must be at least 1, got {digits}", digits)

    x = float(x)
    if x == 0 or not math.isfinite(x):
        return x

    return round(x, digits - 1 - decimal_exponent(x))


def _trim_zeros(text: str) -> str:
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


# ===================================================================
# RENDERINGS
# ===================================================================

def format_number(x: float, digits: int = 3) -> str:
    """Fixed-point rendering with `digits` significant digits, e.g. '1230', '0.00123'"""
    rounded = round_significant(x, digits)
    if not math.isfinite(rounded):
        return str(rounded)
    if rounded == 0:
        return '0'

    decimals = max(0, digits - 1 - decimal_exponent(rounded))
    return _trim_zeros(f"{rounded:.{decimals}f}")


def format_scientific(x: float, digits: int = 3, unicode: bool = False) -> str:
    """
    Scientific notation rendering

    Args:
        x: Value to render
        digits: Significant digits of the mantissa
        unicode: Use '×10ⁿ' instead of 'en'

    Returns:
        String such as '1.23e24' or '1.23×10²⁴'; the exponent is omitted
        when it is zero
    """
    rounded = round_significant(x, digits)
    if not math.isfinite(rounded):
        return str(rounded)
    if rounded == 0:
        return '0'

    exponent = decimal_exponent(rounded)
    mantissa = round(rounded / 10.0 ** exponent, digits - 1)
    if abs(mantissa) >= 10:
        mantissa /= 10
        exponent += 1

    mantissa_text = _trim_zeros(f"{mantissa:.{digits - 1}f}")
    if exponent == 0:
        return mantissa_text
    if unicode:
        return f"{mantissa_text}×10{str(exponent).translate(_SUPERSCRIPTS)}"
    return f"{mantissa_text}e{exponent}"


def format_si(x: float, unit: str = '', digits: int = 3, unicode: bool = True) -> str:
    """
    Rendering with the SI prefix that brings the mantissa into [1, 1000)

    Args:
        x: Value in the unprefixed unit
        unit: Unprefixed unit symbol appended after the prefix (e.g. 'm', 's')
        digits: Significant digits
        unicode: Use 'µ' for micro, otherwise 'u'

    Returns:
        String such as '1.5 km' or '12 µs'
    """
    rounded = round_significant(x, digits)
    if not math.isfinite(rounded):
        return f"{rounded} {unit}".strip()

    exponent = 3 * math.floor(decimal_exponent(rounded) / 3)
    exponent = max(min(SI_PREFIXES), min(max(SI_PREFIXES), exponent))

    prefix = SI_PREFIXES[exponent]
    if prefix == 'µ' and not unicode:
        prefix = ASCII_MICRO

    mantissa_text = format_number(rounded / 10.0 ** exponent, digits)
    suffix = f"{prefix}{unit}"
    return f"{mantissa_text} {suffix}" if suffix else mantissa_text


def format_named(x: float, digits: int = 3) -> str:
    """
    Rendering with a named power of a thousand, e.g. '1.5 million'

    Values below one thousand use fixed notation, values beyond the largest
    name fall back to scientific notation.
    """
    rounded = round_significant(x, digits)
    if not math.isfinite(rounded) or abs(rounded) < 1000:
        return format_number(rounded, digits)

    exponent = 3 * math.floor(decimal_exponent(rounded) / 3)
    names = dict(LARGE_NUMBER_NAMES)
    if exponent not in names:
        return format_scientific(rounded, digits)

    return f"{format_number(rounded / 10.0 ** exponent, digits)} {names[exponent]}"
