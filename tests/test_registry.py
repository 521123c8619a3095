from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from unitfmt.core.units import (
    NONLINEAR_UNIT_DEFINITIONS,
    SI_UNIT_DEFINITIONS,
    UnitDefinition,
    UnitRegistry,
    UnitType,
    get_default_registry,
    get_unit_info,
    list_units_by_type,
    set_default_registry,
)


def test_lookup_distinguishes_absent_from_present() -> None:
    registry = UnitRegistry()

    assert registry.lookup_linear("m") is None
    assert registry.lookup_nonlinear("degC") is None

    registry.insert_linear("m", 1.0)

    assert registry.lookup_linear("m") == 1.0
    assert registry.contains("m")
    assert "m" in registry
    assert "s" not in registry


@pytest.mark.parametrize("multiplier", [0.0, math.nan, math.inf])
def test_insert_linear_rejects_degenerate_multipliers(multiplier: float) -> None:
    registry = UnitRegistry()

    with pytest.raises(ValueError):
        registry.insert_linear("bad", multiplier)

    assert registry.lookup_linear("bad") is None


def test_insert_linear_is_an_upsert() -> None:
    registry = UnitRegistry()

    registry.insert_linear("kg/d", 1.0 / 86400.0)
    registry.insert_linear("kg/d", 1.0 / 86400.0)
    registry.insert_linear("kg/d", 2.0)

    assert registry.lookup_linear("kg/d") == 2.0
    assert len(registry) == 1


def test_linear_and_nonlinear_maps_are_disjoint() -> None:
    registry = UnitRegistry.default()

    with pytest.raises(ValueError):
        registry.insert_linear("degC", 1.0)

    with pytest.raises(ValueError):
        registry.insert_nonlinear("m", lambda x: x, lambda x: x)

    registry.insert_nonlinear("degR", lambda x: x * 5.0 / 9.0, lambda x: x * 9.0 / 5.0)
    assert registry.lookup_nonlinear("degR").to_internal(9.0) == pytest.approx(5.0)
    assert registry.lookup_linear("degR") is None


def test_register_refuses_conflicting_definitions() -> None:
    registry = UnitRegistry([UnitDefinition("m", "meter", UnitType.LENGTH, 1.0)])

    registry.register(UnitDefinition("m", "meter", UnitType.LENGTH, 1.0))

    with pytest.raises(ValueError):
        registry.register(UnitDefinition("ft", "foot", UnitType.LENGTH, 0.3048, ["m"]))

    assert registry.lookup_linear("ft") is None


def test_seed_table_rejects_repeated_symbols() -> None:
    meter = UnitDefinition("m", "meter", UnitType.LENGTH, 1.0)

    with pytest.raises(ValueError):
        UnitRegistry([meter, meter])

    with pytest.raises(ValueError):
        UnitRegistry([meter, UnitDefinition("metre", "metre", UnitType.LENGTH, 1.0, ["m"])])

    with pytest.raises(ValueError):
        UnitRegistry([UnitDefinition("degC", "fake", UnitType.TEMPERATURE, 1.0)], NONLINEAR_UNIT_DEFINITIONS)


def test_unit_definition_rejects_zero_multiplier() -> None:
    with pytest.raises(ValueError):
        UnitDefinition("zero", "zero", UnitType.DIMENSIONLESS, 0.0)


def test_default_seed_has_no_collisions() -> None:
    registry = UnitRegistry.default()

    linear_symbols = [s for unit_def in SI_UNIT_DEFINITIONS for s in unit_def.symbols]
    nonlinear_symbols = [s for unit in NONLINEAR_UNIT_DEFINITIONS for s in unit.symbols]

    assert len(set(linear_symbols + nonlinear_symbols)) == len(linear_symbols) + len(nonlinear_symbols)
    assert len(registry) == len(linear_symbols) + len(nonlinear_symbols)


def test_default_seed_contents() -> None:
    registry = UnitRegistry.default()

    assert registry.lookup_linear("km") == 1000.0
    assert registry.lookup_linear("d") == 86400.0
    assert registry.lookup_linear("um") == registry.lookup_linear("µm")
    assert registry.lookup_linear("deg") == pytest.approx(math.pi / 180.0)
    assert registry.lookup_nonlinear("°C") is registry.lookup_nonlinear("degC")


def test_copy_is_independent() -> None:
    registry = UnitRegistry.from_multipliers({"m": 1.0})
    clone = registry.copy()

    clone.insert_linear("km", 1000.0)

    assert "km" in clone
    assert "km" not in registry


def test_default_registry_singleton() -> None:
    first = get_default_registry()

    assert get_default_registry() is first

    custom = UnitRegistry.from_multipliers({"m": 1.0})
    set_default_registry(custom)
    assert get_default_registry() is custom

    set_default_registry(None)
    assert get_default_registry() is not custom


def test_concurrent_identical_inserts_are_benign() -> None:
    registry = UnitRegistry()

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: registry.insert_linear("kg/d", 1.0 / 86400.0), range(200)))

    assert registry.lookup_linear("kg/d") == 1.0 / 86400.0
    assert registry.symbols() == ["kg/d"]


def test_definition_helpers() -> None:
    assert get_unit_info("um").symbol == "µm"
    assert get_unit_info("furlong") is None
    assert {u.symbol for u in list_units_by_type(UnitType.MASS)} == {"kg", "g", "mg", "t"}
