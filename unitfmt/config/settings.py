"""
Settings for unitfmt

Converter defaults, extra unit definitions and logging options, loadable
from a JSON file.
"""

import json
import math
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Dict, Optional, Union, Any

from ..core.exceptions import ConfigurationError
from ..core.units import QuantityConverter, UnitRegistry


@dataclass
class UnitSettings:
    """Configuration for registries and converters"""

    # Converter defaults
    parse_compound: bool = True
    memoize: bool = True
    fail_loud: bool = True

    # Formatting
    significant_digits: int = 3

    # Units added on top of the built-in table (symbol -> multiplier)
    extra_units: Dict[str, float] = field(default_factory=dict)

    # Logging
    log_file: Optional[str] = None
    verbose: bool = False

    def validate(self) -> bool:
        """Validate configuration"""
        for name in ('parse_compound', 'memoize', 'fail_loud', 'verbose'):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"'{name}' must be a boolean", parameter=name)

        if (not isinstance(self.significant_digits, int) or isinstance(self.significant_digits, bool)
                or self.significant_digits < 1):
            raise ConfigurationError("Significant digits must be a positive integer",
                                     parameter='significant_digits')

        if not isinstance(self.extra_units, dict):
            raise ConfigurationError("Extra units must be a mapping of symbol to multiplier",
                                     config_section='extra_units')

        for symbol, multiplier in self.extra_units.items():
            if not isinstance(symbol, str) or not symbol:
                raise ConfigurationError(f"Invalid unit symbol {symbol!r}", config_section='extra_units')
            if (not isinstance(multiplier, (int, float)) or isinstance(multiplier, bool)
                    or multiplier == 0 or not math.isfinite(multiplier)):
                raise ConfigurationError(f"Multiplier for '{symbol}' must be a finite nonzero number",
                                         config_section='extra_units', parameter=symbol)

        return True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UnitSettings':
        """Create settings from a mapping, rejecting unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        settings = cls(**data)
        settings.validate()
        return settings

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'UnitSettings':
        """
        Load settings from a JSON file

        Raises:
            ConfigurationError: If the file cannot be read or is invalid
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file '{path}': {e}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file '{path}': {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file '{path}' must contain a JSON object")

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, path: Union[str, Path]) -> None:
        """Write settings as JSON"""
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    # ===================================================================
    # FACTORIES
    # ===================================================================

    def build_registry(self, base: UnitRegistry = None) -> UnitRegistry:
        """Seeded registry (or a copy of `base`) extended with the extra units"""
        registry = base.copy() if base is not None else UnitRegistry.default()
        for symbol, multiplier in self.extra_units.items():
            try:
                registry.insert_linear(symbol, multiplier)
            except ValueError as e:
                raise ConfigurationError(str(e), config_section='extra_units', parameter=symbol)
        return registry

    def build_converter(self, registry: UnitRegistry = None, logger=None) -> QuantityConverter:
        """Converter configured with these defaults"""
        return QuantityConverter(
            registry if registry is not None else self.build_registry(),
            parse_compound=self.parse_compound,
            memoize=self.memoize,
            fail_loud=self.fail_loud,
            logger=logger
        )
