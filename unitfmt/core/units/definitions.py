"""
Unit Definitions for unitfmt

Built-in units used to seed a registry.  Internal (canonical) units are
meter, kilogram, second, kelvin, ampere, mole, candela and radian; every
multiplier converts a value in the unit to the internal unit.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, List
from enum import Enum


class UnitType(Enum):
    """Categories of physical units"""
    LENGTH = "length"
    TIME = "time"
    MASS = "mass"
    TEMPERATURE = "temperature"
    ANGLE = "angle"
    CURRENT = "current"
    AMOUNT = "amount"
    LUMINOSITY = "luminosity"
    AREA = "area"
    VOLUME = "volume"
    FREQUENCY = "frequency"
    FORCE = "force"
    PRESSURE = "pressure"
    ENERGY = "energy"
    POWER = "power"
    VELOCITY = "velocity"
    DIMENSIONLESS = "dimensionless"
    COMPOUND = "compound"


@dataclass(frozen=True)
class UnitDefinition:
    """
    Definition of a linear unit

    A linear unit relates to the internal unit by a pure multiplication:
    ``value_in_unit * multiplier == value_in_internal_units``.
    """
    symbol: str  # Unit symbol (e.g., "km")
    name: str  # Full name (e.g., "kilometer")
    unit_type: UnitType  # Category of unit
    multiplier: float  # Multiplication factor to the internal unit
    aliases: List[str] = None  # Alternative symbols

    def __post_init__(self):
        """Validate unit definition after creation"""
        if self.multiplier == 0 or not math.isfinite(self.multiplier):
            raise ValueError(f"Multiplier must be finite and nonzero, got {self.multiplier}")

        if self.aliases is None:
            object.__setattr__(self, 'aliases', [])

    @property
    def symbols(self) -> List[str]:
        """Primary symbol followed by aliases"""
        return [self.symbol, *self.aliases]


@dataclass(frozen=True)
class NonlinearUnit:
    """
    Affine unit described by a pair of conversion functions

    Both functions must accept floats and numpy arrays.
    """
    symbol: str
    name: str
    to_internal: Callable
    from_internal: Callable
    unit_type: UnitType = UnitType.TEMPERATURE
    aliases: List[str] = None

    def __post_init__(self):
        if self.aliases is None:
            object.__setattr__(self, 'aliases', [])

    @property
    def symbols(self) -> List[str]:
        return [self.symbol, *self.aliases]


# ===================================================================
# PHYSICAL CONSTANTS USED BY THE TABLES
# ===================================================================

_DAY = 86400.0
_JULIAN_YEAR = 365.25 * _DAY
_ASTRONOMICAL_UNIT = 149597870700.0
_LIGHT_YEAR = 299792458.0 * _JULIAN_YEAR
_PARSEC = _ASTRONOMICAL_UNIT * 648000.0 / math.pi
_ELECTRON_VOLT = 1.602176634e-19
_DEGREE = math.pi / 180.0
_ZERO_CELSIUS = 273.15


def _linear(symbol, name, unit_type, multiplier, *aliases):
    return UnitDefinition(symbol, name, unit_type, multiplier, list(aliases))


# ===================================================================
# LINEAR UNITS
# ===================================================================

SI_UNIT_DEFINITIONS: List[UnitDefinition] = [
    # Length
    _linear('m', 'meter', UnitType.LENGTH, 1.0),
    _linear('km', 'kilometer', UnitType.LENGTH, 1e3),
    _linear('cm', 'centimeter', UnitType.LENGTH, 1e-2),
    _linear('mm', 'millimeter', UnitType.LENGTH, 1e-3),
    _linear('µm', 'micrometer', UnitType.LENGTH, 1e-6, 'um'),
    _linear('nm', 'nanometer', UnitType.LENGTH, 1e-9),
    _linear('au', 'astronomical unit', UnitType.LENGTH, _ASTRONOMICAL_UNIT, 'AU'),
    _linear('ly', 'light year', UnitType.LENGTH, _LIGHT_YEAR),
    _linear('pc', 'parsec', UnitType.LENGTH, _PARSEC),
    _linear('kpc', 'kiloparsec', UnitType.LENGTH, 1e3 * _PARSEC),
    _linear('Mpc', 'megaparsec', UnitType.LENGTH, 1e6 * _PARSEC),

    # Time
    _linear('s', 'second', UnitType.TIME, 1.0),
    _linear('ms', 'millisecond', UnitType.TIME, 1e-3),
    _linear('µs', 'microsecond', UnitType.TIME, 1e-6, 'us'),
    _linear('ns', 'nanosecond', UnitType.TIME, 1e-9),
    _linear('min', 'minute', UnitType.TIME, 60.0),
    _linear('h', 'hour', UnitType.TIME, 3600.0),
    _linear('d', 'day', UnitType.TIME, _DAY),
    _linear('yr', 'julian year', UnitType.TIME, _JULIAN_YEAR, 'a'),
    _linear('Myr', 'megayear', UnitType.TIME, 1e6 * _JULIAN_YEAR),
    _linear('Gyr', 'gigayear', UnitType.TIME, 1e9 * _JULIAN_YEAR),

    # Mass
    _linear('kg', 'kilogram', UnitType.MASS, 1.0),
    _linear('g', 'gram', UnitType.MASS, 1e-3),
    _linear('mg', 'milligram', UnitType.MASS, 1e-6),
    _linear('t', 'tonne', UnitType.MASS, 1e3),

    # Temperature (differences only; scales are nonlinear)
    _linear('K', 'kelvin', UnitType.TEMPERATURE, 1.0),

    # Angle
    _linear('rad', 'radian', UnitType.ANGLE, 1.0),
    _linear('deg', 'degree', UnitType.ANGLE, _DEGREE, '°'),
    _linear('arcmin', 'arcminute', UnitType.ANGLE, _DEGREE / 60.0),
    _linear('arcsec', 'arcsecond', UnitType.ANGLE, _DEGREE / 3600.0),

    # Other base units
    _linear('A', 'ampere', UnitType.CURRENT, 1.0),
    _linear('mol', 'mole', UnitType.AMOUNT, 1.0),
    _linear('cd', 'candela', UnitType.LUMINOSITY, 1.0),

    # Area and volume
    _linear('ha', 'hectare', UnitType.AREA, 1e4),
    _linear('L', 'liter', UnitType.VOLUME, 1e-3, 'l'),

    # Derived
    _linear('Hz', 'hertz', UnitType.FREQUENCY, 1.0),
    _linear('N', 'newton', UnitType.FORCE, 1.0),
    _linear('Pa', 'pascal', UnitType.PRESSURE, 1.0),
    _linear('kPa', 'kilopascal', UnitType.PRESSURE, 1e3),
    _linear('bar', 'bar', UnitType.PRESSURE, 1e5),
    _linear('atm', 'atmosphere', UnitType.PRESSURE, 101325.0),
    _linear('J', 'joule', UnitType.ENERGY, 1.0),
    _linear('kJ', 'kilojoule', UnitType.ENERGY, 1e3),
    _linear('cal', 'calorie', UnitType.ENERGY, 4.184),
    _linear('eV', 'electronvolt', UnitType.ENERGY, _ELECTRON_VOLT),
    _linear('W', 'watt', UnitType.POWER, 1.0),
    _linear('kW', 'kilowatt', UnitType.POWER, 1e3),

    # Dimensionless
    _linear('%', 'percent', UnitType.DIMENSIONLESS, 1e-2),
]


# ===================================================================
# NONLINEAR (AFFINE) UNITS
# ===================================================================

def _celsius_to_kelvin(x):
    return x + _ZERO_CELSIUS


def _kelvin_to_celsius(x):
    return x - _ZERO_CELSIUS


def _fahrenheit_to_kelvin(x):
    return (x - 32.0) * 5.0 / 9.0 + _ZERO_CELSIUS


def _kelvin_to_fahrenheit(x):
    return (x - _ZERO_CELSIUS) * 9.0 / 5.0 + 32.0


NONLINEAR_UNIT_DEFINITIONS: List[NonlinearUnit] = [
    NonlinearUnit('degC', 'degree Celsius', _celsius_to_kelvin, _kelvin_to_celsius,
                  aliases=['°C']),
    NonlinearUnit('degF', 'degree Fahrenheit', _fahrenheit_to_kelvin, _kelvin_to_fahrenheit,
                  aliases=['°F']),
]


# ===================================================================
# LOOKUP HELPERS
# ===================================================================

def _build_index() -> Dict[str, UnitDefinition]:
    index = {}
    for unit_def in SI_UNIT_DEFINITIONS:
        for symbol in unit_def.symbols:
            index[symbol] = unit_def
    return index


_DEFINITION_INDEX: Dict[str, UnitDefinition] = _build_index()


def get_unit_info(unit_symbol: str) -> Optional[UnitDefinition]:
    """
    Get built-in unit definition by symbol or alias

    Args:
        unit_symbol: Symbol to look up (e.g., 'km')

    Returns:
        UnitDefinition if found, None otherwise
    """
    return _DEFINITION_INDEX.get(unit_symbol)


def list_units_by_type(unit_type: UnitType) -> List[UnitDefinition]:
    """List built-in linear units of a specific type"""
    return [unit_def for unit_def in SI_UNIT_DEFINITIONS if unit_def.unit_type == unit_type]
