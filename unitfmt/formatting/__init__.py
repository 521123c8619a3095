"""
Formatting Module for unitfmt

Human-readable renderings of numbers, quantities and geographic coordinates.
"""

from .numbers import (
    round_significant,
    format_number,
    format_scientific,
    format_si,
    format_named,
    SI_PREFIXES,
    LARGE_NUMBER_NAMES
)
from .quantities import format_quantity, STYLES
from .coordinates import format_latitude, format_longitude, format_lat_lon, format_dms

__all__ = [
    'round_significant',
    'format_number',
    'format_scientific',
    'format_si',
    'format_named',
    'SI_PREFIXES',
    'LARGE_NUMBER_NAMES',
    'format_quantity',
    'STYLES',
    'format_latitude',
    'format_longitude',
    'format_lat_lon',
    'format_dms'
]
