from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from unitfmt.core.exceptions import ConversionError, UnknownUnitError, UnresolvableUnitError
from unitfmt.core.units import (
    QuantityConverter,
    UnitRegistry,
    convert_value,
    from_internal,
    get_default_registry,
    is_valid_unit,
    to_internal,
)


@pytest.mark.parametrize("unit", ["", None])
def test_empty_unit_is_a_noop(converter: QuantityConverter, unit) -> None:
    assert converter.to_internal(42.0, unit) == 42.0
    assert converter.from_internal(42.0, unit) == 42.0


def test_linear_conversion(converter: QuantityConverter) -> None:
    assert converter.to_internal(1.5, "km") == 1500.0
    assert converter.from_internal(1500.0, "km") == 1.5


def test_nonlinear_conversion(default_converter: QuantityConverter) -> None:
    assert default_converter.to_internal(0.0, "degC") == pytest.approx(273.15)
    assert default_converter.to_internal(32.0, "degF") == pytest.approx(273.15)
    assert default_converter.from_internal(373.15, "degC") == pytest.approx(100.0)
    assert default_converter.from_internal(373.15, "°F") == pytest.approx(212.0)


def test_unknown_unit_without_parsing(converter: QuantityConverter) -> None:
    with pytest.raises(UnknownUnitError) as exc_info:
        converter.to_internal(1.0, "km/s", parse_compound=False)

    assert exc_info.value.symbol == "km/s"
    assert math.isnan(converter.to_internal(1.0, "km/s", parse_compound=False, fail_loud=False))


def test_compound_unit_is_memoized(converter: QuantityConverter, base_registry: UnitRegistry) -> None:
    assert "kg/d" not in base_registry

    first = converter.to_internal(1.0, "kg/d")

    assert first == pytest.approx(1.0 / 86400.0)
    assert base_registry.lookup_linear("kg/d") == first
    assert converter.to_internal(1.0, "kg/d") == first


def test_memoization_can_be_disabled(converter: QuantityConverter, base_registry: UnitRegistry) -> None:
    assert converter.to_internal(2.0, "km/d", memoize=False) == pytest.approx(2000.0 / 86400.0)
    assert "km/d" not in base_registry

    no_memo = QuantityConverter(base_registry, memoize=False)
    no_memo.from_internal(1.0, "m/d")
    assert "m/d" not in base_registry


def test_concurrent_memoization_of_same_unit(base_registry: UnitRegistry) -> None:
    converters = [QuantityConverter(base_registry) for _ in range(4)]
    expected = 1000.0 / 86400.0

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda i: converters[i % 4].to_internal(1.0, "km/d"), range(200)))

    assert results == [pytest.approx(expected)] * 200
    assert base_registry.lookup_linear("km/d") == pytest.approx(expected)
    assert base_registry.symbols().count("km/d") == 1


def test_parse_failure_propagates(converter: QuantityConverter, base_registry: UnitRegistry) -> None:
    with pytest.raises(UnresolvableUnitError) as exc_info:
        converter.to_internal(1.0, "furlong/fortnight")

    assert exc_info.value.substring == "furlong"
    assert exc_info.value.expression == "furlong/fortnight"
    assert "furlong/fortnight" not in base_registry

    assert math.isnan(converter.from_internal(1.0, "furlong/fortnight", fail_loud=False))


def test_quiet_converter_default() -> None:
    quiet = QuantityConverter(UnitRegistry.from_multipliers({"m": 1.0}), fail_loud=False)

    assert math.isnan(quiet.to_internal(1.0, "furlong"))
    with pytest.raises(UnresolvableUnitError):
        quiet.to_internal(1.0, "furlong", fail_loud=True)


@pytest.mark.parametrize("unit", ["m", "km", "µm", "d", "yr", "pc", "eV", "deg", "%", "degC", "degF",
                                  "km/s", "kg m^2/s^2", "10^24 kg", "AU/d"])
def test_round_trip(default_converter: QuantityConverter, unit: str) -> None:
    for value in (0.5, -3.25, 1234.5):
        internal = default_converter.to_internal(value, unit)
        assert default_converter.from_internal(internal, unit) == pytest.approx(value)


def test_numpy_arrays(converter: QuantityConverter) -> None:
    values = np.array([1.0, 2.5])

    np.testing.assert_allclose(converter.to_internal(values, "km"), [1000.0, 2500.0])
    np.testing.assert_allclose(converter.from_internal(values, "km/s"), [1e-3, 2.5e-3])

    failed = converter.to_internal(values, "furlong", fail_loud=False)
    assert failed.shape == values.shape
    assert np.all(np.isnan(failed))


def test_is_valid_unit(converter: QuantityConverter) -> None:
    assert converter.is_valid_unit("km")
    assert converter.is_valid_unit("")
    assert converter.is_valid_unit("m^3/(kg s^2)")
    assert not converter.is_valid_unit("km/s", parse_compound=False)
    assert not converter.is_valid_unit("furlong")
    assert not converter.is_valid_unit("m/(kg")


def test_convert_between_external_units(default_converter: QuantityConverter) -> None:
    assert default_converter.convert(1.0, "km", "m") == pytest.approx(1000.0)
    assert default_converter.convert(100.0, "degC", "degF") == pytest.approx(212.0)
    assert default_converter.convert(90.0, "km/h", "m/s") == pytest.approx(25.0)

    with pytest.raises(ConversionError) as exc_info:
        default_converter.convert(1.0, "km", "furlong")
    assert exc_info.value.to_unit == "furlong"

    assert math.isnan(default_converter.convert(1.0, "km", "furlong", fail_loud=False))


def test_get_multiplier(default_converter: QuantityConverter) -> None:
    assert default_converter.get_multiplier("km/s") == pytest.approx(1000.0)

    with pytest.raises(ConversionError):
        default_converter.get_multiplier("degC")


def test_statistics(converter: QuantityConverter) -> None:
    converter.to_internal(1.0, "km")
    converter.to_internal(1.0, "km/s")
    converter.to_internal(1.0, "km/s")
    converter.to_internal(1.0, "furlong", fail_loud=False)

    stats = converter.get_statistics()

    assert stats["conversions"] == 3
    assert stats["parsed_units"] == 1
    assert stats["memoized_units"] == 1
    assert stats["registry_hits"] == 2
    assert stats["errors"] == 1

    converter.reset_statistics()
    assert converter.get_statistics()["conversions"] == 0


def test_module_level_shortcuts_use_default_registry() -> None:
    assert to_internal(2.0, "km") == 2000.0
    assert from_internal(2000.0, "km") == 2.0
    assert is_valid_unit("kg/d")
    assert "kg/d" in get_default_registry()
    assert not is_valid_unit("furlong")
    assert convert_value(90.0, "km/h", "m/s") == pytest.approx(25.0)
