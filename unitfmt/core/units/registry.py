"""
Unit Registry

Mutable mapping from unit symbol to either a linear multiplier or a
nonlinear conversion pair.  The two maps are disjoint.
"""

import math
import threading
from typing import Callable, Dict, Iterable, List, Optional

from .definitions import (
    NONLINEAR_UNIT_DEFINITIONS,
    SI_UNIT_DEFINITIONS,
    NonlinearUnit,
    UnitDefinition,
)


class UnitRegistry:
    """
    Registry of linear and nonlinear units for one internal unit system

    Lookups return None for absent symbols.  Linear entries are upserted by
    ``insert_linear`` (used for memoized compound units); ``register`` is the
    strict variant used for seeding and refuses to silently replace a
    different entry.
    """

    def __init__(self, definitions: Iterable[UnitDefinition] = (),
                 nonlinear: Iterable[NonlinearUnit] = ()):
        """
        Seed the registry from definition tables

        Raises:
            ValueError: If a symbol or alias appears more than once in the seed
        """
        self._multipliers: Dict[str, float] = {}
        self._nonlinear: Dict[str, NonlinearUnit] = {}
        self._lock = threading.RLock()

        definitions = list(definitions)
        nonlinear = list(nonlinear)

        seen = set()
        for entry in definitions + nonlinear:
            for symbol in entry.symbols:
                if symbol in seen:
                    raise ValueError(f"Unit '{symbol}' appears more than once in the seed table")
                seen.add(symbol)

        for unit_def in definitions:
            self.register(unit_def)
        for unit in nonlinear:
            self.register_nonlinear(unit)

    @classmethod
    def default(cls) -> 'UnitRegistry':
        """Registry seeded with the built-in unit table"""
        return cls(SI_UNIT_DEFINITIONS, NONLINEAR_UNIT_DEFINITIONS)

    @classmethod
    def from_multipliers(cls, multipliers: Dict[str, float]) -> 'UnitRegistry':
        """Registry holding only the given linear units"""
        registry = cls()
        for symbol, multiplier in multipliers.items():
            registry.insert_linear(symbol, multiplier)
        return registry

    # ===================================================================
    # LOOKUPS
    # ===================================================================

    def lookup_linear(self, symbol: str) -> Optional[float]:
        with self._lock:
            return self._multipliers.get(symbol)

    def lookup_nonlinear(self, symbol: str) -> Optional[NonlinearUnit]:
        with self._lock:
            return self._nonlinear.get(symbol)

    def contains(self, symbol: str) -> bool:
        """True if either map holds the symbol"""
        with self._lock:
            return symbol in self._multipliers or symbol in self._nonlinear

    def __contains__(self, symbol: str) -> bool:
        return self.contains(symbol)

    def __len__(self) -> int:
        with self._lock:
            return len(self._multipliers) + len(self._nonlinear)

    def symbols(self) -> List[str]:
        """All registered symbols, sorted"""
        with self._lock:
            return sorted([*self._multipliers, *self._nonlinear])

    # ===================================================================
    # MUTATION
    # ===================================================================

    def insert_linear(self, symbol: str, multiplier: float) -> None:
        """
        Insert or overwrite a linear unit

        Args:
            symbol: Unit symbol
            multiplier: Factor converting the unit to internal units

        Raises:
            ValueError: If the multiplier is zero or not finite, or the symbol
                is already a nonlinear unit
        """
        multiplier = float(multiplier)
        if multiplier == 0 or not math.isfinite(multiplier):
            raise ValueError(f"Multiplier for '{symbol}' must be finite and nonzero, got {multiplier}")

        with self._lock:
            if symbol in self._nonlinear:
                raise ValueError(f"Unit '{symbol}' is already registered as a nonlinear unit")
            self._multipliers[symbol] = multiplier

    def insert_nonlinear(self, symbol: str, to_internal: Callable, from_internal: Callable,
                         name: str = None) -> None:
        """Insert or overwrite a nonlinear unit"""
        unit = NonlinearUnit(symbol, name or symbol, to_internal, from_internal)
        with self._lock:
            if symbol in self._multipliers:
                raise ValueError(f"Unit '{symbol}' is already registered as a linear unit")
            self._nonlinear[symbol] = unit

    def register(self, unit_def: UnitDefinition) -> None:
        """
        Register a linear unit definition under its symbol and aliases

        Raises:
            ValueError: If any symbol already exists with a different meaning
        """
        with self._lock:
            for symbol in unit_def.symbols:
                existing = self._multipliers.get(symbol)
                if symbol in self._nonlinear or (existing is not None and existing != unit_def.multiplier):
                    raise ValueError(f"Unit '{symbol}' already registered")
            for symbol in unit_def.symbols:
                self._multipliers[symbol] = unit_def.multiplier

    def register_nonlinear(self, unit: NonlinearUnit) -> None:
        """Register a nonlinear unit under its symbol and aliases"""
        with self._lock:
            for symbol in unit.symbols:
                if symbol in self._multipliers or symbol in self._nonlinear:
                    raise ValueError(f"Unit '{symbol}' already registered")
            for symbol in unit.symbols:
                self._nonlinear[symbol] = unit

    def copy(self) -> 'UnitRegistry':
        """Independent registry with the same entries"""
        clone = UnitRegistry()
        with self._lock:
            clone._multipliers = dict(self._multipliers)
            clone._nonlinear = dict(self._nonlinear)
        return clone

    def __repr__(self):
        with self._lock:
            return (f"UnitRegistry(linear={len(self._multipliers)}, "
                    f"nonlinear={len(self._nonlinear)})")


# Process-wide default registry
_default_registry: Optional[UnitRegistry] = None
_default_lock = threading.Lock()


def get_default_registry() -> UnitRegistry:
    """Return the process-wide registry (built from the seed table on first use)"""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = UnitRegistry.default()
        return _default_registry


def set_default_registry(registry: Optional[UnitRegistry]) -> None:
    """Replace the process-wide registry; None rebuilds it on next use"""
    global _default_registry
    with _default_lock:
        _default_registry = registry
