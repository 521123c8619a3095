from __future__ import annotations

import math

import pytest

from unitfmt.core.units import QuantityConverter, UnitRegistry, set_default_registry


@pytest.fixture(autouse=True)
def fresh_default_registry():
    """Keep memoized units from leaking between tests through the default registry."""
    set_default_registry(None)
    yield
    set_default_registry(None)


@pytest.fixture
def base_registry() -> UnitRegistry:
    return UnitRegistry.from_multipliers({
        "m": 1.0,
        "s": 1.0,
        "kg": 1.0,
        "km": 1000.0,
        "g": 1e-3,
        "d": 86400.0,
        "deg": math.pi / 180.0,
    })


@pytest.fixture
def converter(base_registry: UnitRegistry) -> QuantityConverter:
    return QuantityConverter(base_registry)


@pytest.fixture
def default_converter() -> QuantityConverter:
    return QuantityConverter(UnitRegistry.default())
