"""
Quantity Conversion

Converts quantities between external units and the internal unit system,
delegating unknown unit strings to the compound unit parser and memoizing
the parsed multipliers in the registry.
"""

import logging
from typing import Union, Dict, Any, Optional

import numpy as np

from ..exceptions import ConversionError, UnknownUnitError
from .parser import evaluate_unit_expression
from .registry import UnitRegistry, get_default_registry

Value = Union[float, np.ndarray]


class QuantityConverter:
    """
    Converter between external units and internal units

    Lookup order for a unit string is: linear registry entry, nonlinear
    registry entry, compound unit parser.  Successful parses are written
    back to the registry when memoization is enabled, so the next lookup of
    the same string is a direct hit.

    The keyword defaults given here apply to every call that does not
    override them.
    """

    def __init__(self, registry: UnitRegistry = None, parse_compound: bool = True,
                 memoize: bool = True, fail_loud: bool = True, logger=None):
        """
        Initialize quantity converter

        Args:
            registry: Unit registry to read and extend (default registry if None)
            parse_compound: Resolve unknown unit strings with the compound parser
            memoize: Store parsed compound units in the registry
            fail_loud: Raise on failure if True, return NaN otherwise
            logger: Logger to use (a 'QuantityConverter' logger if None)
        """
        self.registry = registry if registry is not None else get_default_registry()
        self.parse_compound = parse_compound
        self.memoize = memoize
        self.fail_loud = fail_loud
        self.logger = logger or self._create_default_logger()

        # Statistics for monitoring
        self._stats = {
            'conversions': 0,
            'registry_hits': 0,
            'parsed_units': 0,
            'memoized_units': 0,
            'errors': 0
        }

    # ===================================================================
    # PUBLIC OPERATIONS
    # ===================================================================

    def to_internal(self, value: Value, unit: Optional[str], parse_compound: bool = None,
                    memoize: bool = None, fail_loud: bool = None) -> Value:
        """
        Convert value from an external unit to internal units

        Args:
            value: Value(s) to convert
            unit: Source unit (e.g., 'km', 'degC', 'kg/d'); empty means no-op
            parse_compound: Override the instance setting
            memoize: Override the instance setting
            fail_loud: Override the instance setting

        Returns:
            Value(s) in internal units, NaN in quiet mode on failure

        Raises:
            UnknownUnitError: If the unit is unknown and parsing is disabled
            UnresolvableUnitError: If the compound parser fails
        """
        return self._convert(value, unit, True, parse_compound, memoize, fail_loud)

    def from_internal(self, value: Value, unit: Optional[str], parse_compound: bool = None,
                      memoize: bool = None, fail_loud: bool = None) -> Value:
        """
        Convert value from internal units to an external unit

        Same arguments and failure behavior as ``to_internal``.
        """
        return self._convert(value, unit, False, parse_compound, memoize, fail_loud)

    def convert(self, value: Value, from_unit: str, to_unit: str,
                fail_loud: bool = None) -> Value:
        """Convert value between two external units via internal units"""
        if from_unit == to_unit:
            return value

        fail_loud = self.fail_loud if fail_loud is None else fail_loud
        try:
            internal = self.to_internal(value, from_unit, fail_loud=True)
            return self.from_internal(internal, to_unit, fail_loud=True)
        except ConversionError as e:
            if fail_loud:
                raise ConversionError(f"Failed to convert from '{from_unit}' to '{to_unit}': {e}",
                                      from_unit, to_unit) from e
            return self._quiet_failure(value)

    def is_valid_unit(self, unit: Optional[str], parse_compound: bool = None) -> bool:
        """
        Check whether a value can be converted from the unit

        Probes a conversion in quiet mode rather than raising.
        """
        result = self.to_internal(1.0, unit, parse_compound=parse_compound, fail_loud=False)
        return not bool(np.isnan(result))

    def get_multiplier(self, unit: str, parse_compound: bool = None,
                       memoize: bool = None) -> float:
        """
        Multiplier of a linear or compound unit

        Raises:
            ConversionError: If the unit is nonlinear or cannot be resolved
        """
        if self.registry.lookup_nonlinear(unit) is not None:
            raise ConversionError(f"Unit '{unit}' is nonlinear and has no multiplier", unit)
        return self._resolve_multiplier(unit, parse_compound, memoize)

    # ===================================================================
    # INTERNALS
    # ===================================================================

    def _convert(self, value: Value, unit: Optional[str], to_internal: bool,
                 parse_compound: Optional[bool], memoize: Optional[bool],
                 fail_loud: Optional[bool]) -> Value:
        if unit is None or unit == '':
            return value  # No-op unit

        fail_loud = self.fail_loud if fail_loud is None else fail_loud

        try:
            nonlinear = self.registry.lookup_nonlinear(unit)
            if nonlinear is not None:
                self._stats['registry_hits'] += 1
                result = nonlinear.to_internal(value) if to_internal else nonlinear.from_internal(value)
            else:
                multiplier = self._resolve_multiplier(unit, parse_compound, memoize)
                result = value * multiplier if to_internal else value / multiplier
        except ConversionError as e:
            self._stats['errors'] += 1
            if fail_loud:
                raise
            self.logger.debug(f"Quiet conversion failure for '{unit}': {e}")
            return self._quiet_failure(value)

        self._stats['conversions'] += 1
        return result

    def _resolve_multiplier(self, unit: str, parse_compound: Optional[bool],
                            memoize: Optional[bool]) -> float:
        parse_compound = self.parse_compound if parse_compound is None else parse_compound
        memoize = self.memoize if memoize is None else memoize

        multiplier = self.registry.lookup_linear(unit)
        if multiplier is not None:
            self._stats['registry_hits'] += 1
            return multiplier

        if not parse_compound:
            raise UnknownUnitError(unit)

        multiplier = evaluate_unit_expression(unit, self.registry)
        self._stats['parsed_units'] += 1

        if memoize:
            self.registry.insert_linear(unit, multiplier)
            self._stats['memoized_units'] += 1
            self.logger.debug(f"Memoized compound unit '{unit}' = {multiplier!r}")

        return multiplier

    @staticmethod
    def _quiet_failure(value: Value) -> Value:
        if isinstance(value, np.ndarray):
            return np.full(value.shape, np.nan)
        return float('nan')

    def _create_default_logger(self):
        """Create default logger"""
        logger = logging.getLogger('QuantityConverter')
        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            if logger.level == logging.NOTSET:
                logger.setLevel(logging.WARNING)
        return logger

    def get_statistics(self) -> Dict[str, Any]:
        """Get converter usage statistics"""
        stats = self._stats.copy()
        stats['registered_units'] = len(self.registry)
        return stats

    def reset_statistics(self):
        """Reset usage counters"""
        for key in self._stats:
            self._stats[key] = 0
