from __future__ import annotations

import json
import math
from pathlib import Path

import pytest

from unitfmt.config import UnitSettings
from unitfmt.core.exceptions import ConfigurationError
from unitfmt.core.units import UnitRegistry


def test_defaults_are_valid() -> None:
    settings = UnitSettings()

    assert settings.validate()
    assert settings.parse_compound and settings.memoize and settings.fail_loud
    assert settings.significant_digits == 3


def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / "units.json"
    path.write_text(json.dumps({
        "memoize": False,
        "fail_loud": False,
        "extra_units": {"furlong": 201.168, "fortnight": 1209600},
    }))

    settings = UnitSettings.from_file(path)

    assert settings.memoize is False
    assert settings.fail_loud is False
    assert settings.extra_units["fortnight"] == 1209600


def test_save_and_reload(tmp_path: Path) -> None:
    path = tmp_path / "units.json"
    UnitSettings(significant_digits=5, extra_units={"furlong": 201.168}).save(path)

    assert UnitSettings.from_file(path) == UnitSettings(significant_digits=5, extra_units={"furlong": 201.168})


@pytest.mark.parametrize(
    "data",
    [
        {"significant_digits": 0},
        {"significant_digits": "3"},
        {"memoize": "yes"},
        {"extra_units": {"zero": 0}},
        {"extra_units": {"bad": math.inf}},
        {"extra_units": {"": 1.0}},
        {"extra_units": ["m"]},
        {"unknown_key": True},
    ],
)
def test_invalid_settings(data: dict) -> None:
    with pytest.raises(ConfigurationError):
        UnitSettings.from_dict(data)


def test_unreadable_files(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        UnitSettings.from_file(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigurationError):
        UnitSettings.from_file(broken)

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]")
    with pytest.raises(ConfigurationError):
        UnitSettings.from_file(listing)


def test_build_registry_adds_extra_units() -> None:
    settings = UnitSettings(extra_units={"furlong": 201.168})

    registry = settings.build_registry()

    assert registry.lookup_linear("furlong") == 201.168
    assert registry.lookup_linear("km") == 1000.0
    assert registry.lookup_nonlinear("degC") is not None


def test_build_registry_from_base_copies_it() -> None:
    base = UnitRegistry.from_multipliers({"m": 1.0})

    registry = UnitSettings(extra_units={"ft": 0.3048}).build_registry(base)

    assert "ft" in registry
    assert "ft" not in base


def test_extra_unit_cannot_shadow_nonlinear_unit() -> None:
    with pytest.raises(ConfigurationError):
        UnitSettings(extra_units={"degC": 2.0}).build_registry()


def test_build_converter() -> None:
    settings = UnitSettings(parse_compound=False, fail_loud=False, extra_units={"furlong": 201.168})

    converter = settings.build_converter()

    assert converter.to_internal(1.0, "furlong") == 201.168
    assert math.isnan(converter.to_internal(1.0, "furlong/s"))
