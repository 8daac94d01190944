"""Unit registry: one flat lookup from unit tokens to unit definitions."""

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Union

from recipe_book.common.config import settings

from .exceptions import (
    CategoryMismatchError,
    ConversionDataError,
    UnknownUnitError,
)
from .models import MeasurementCategory, UnitDefinition

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def _clean_token(token: str) -> str:
    return _WHITESPACE.sub(" ", token.strip()).lower()


class UnitRegistry:
    """Read-only table of every recognized unit, keyed by alias."""

    def __init__(self, units_path: Union[str, Path]):
        """Initialize registry from a unit table.

        Args:
            units_path: Path to units.json
        """
        self.units_path = Path(units_path)
        self._load_units()
        self._build_alias_lookup()

    def _load_units(self) -> None:
        """Load and validate unit definitions from the JSON table."""
        try:
            with open(self.units_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConversionDataError(f"Cannot read unit table {self.units_path}: {e}") from e

        self.base_units: Dict[MeasurementCategory, UnitDefinition] = {}
        self.units: Dict[str, UnitDefinition] = {}

        for category_name, category_data in data.items():
            try:
                category = MeasurementCategory(category_name)
            except ValueError:
                raise ConversionDataError(f"Unknown measurement category '{category_name}'") from None

            base_token = category_data.get('base_unit')
            units = category_data.get('units', {})
            if base_token not in units:
                raise ConversionDataError(
                    f"Base unit '{base_token}' for category '{category_name}' is not defined"
                )

            for token, spec in units.items():
                if token in self.units:
                    raise ConversionDataError(f"Unit '{token}' defined more than once")
                factor = float(spec.get('factor', 0))
                if factor <= 0:
                    raise ConversionDataError(f"Factor for '{token}' must be positive, got {factor}")
                if token == base_token and factor != 1.0:
                    raise ConversionDataError(f"Base unit '{token}' must have factor 1, got {factor}")

                aliases = {_clean_token(token)}
                aliases.update(_clean_token(alias) for alias in spec.get('aliases', []))
                self.units[token] = UnitDefinition(
                    token=token,
                    category=category,
                    factor=factor,
                    singular=spec.get('singular', token),
                    plural=spec.get('plural', spec.get('singular', token)),
                    aliases=frozenset(aliases),
                )

            self.base_units[category] = self.units[base_token]

    def _build_alias_lookup(self) -> None:
        """Build reverse lookup: alias -> unit definition."""
        self.alias_lookup: Dict[str, UnitDefinition] = {}

        for unit in self.units.values():
            for alias in unit.aliases:
                existing = self.alias_lookup.get(alias)
                if existing is not None and existing.token != unit.token:
                    raise ConversionDataError(
                        f"Alias '{alias}' claimed by both '{existing.token}' and '{unit.token}'"
                    )
                self.alias_lookup[alias] = unit

        # A plural-looking alias must not shadow a different unit's singular form
        for alias, unit in self.alias_lookup.items():
            if len(alias) > 1 and alias.endswith('s'):
                stem_unit = self.alias_lookup.get(alias[:-1])
                if stem_unit is not None and stem_unit.token != unit.token:
                    raise ConversionDataError(
                        f"Alias '{alias}' resolves to '{unit.token}' but its singular "
                        f"form resolves to '{stem_unit.token}'"
                    )

        logger.info(
            f"Loaded {len(self.units)} units in {len(self.base_units)} categories "
            f"with {len(self.alias_lookup)} aliases"
        )

    def resolve(self, token: str) -> UnitDefinition:
        """Resolve a unit token, its aliases or a plural form to a unit.

        Args:
            token: Unit as typed by a user (e.g. "Cups", " tbsp ")

        Returns:
            The matching UnitDefinition

        Raises:
            UnknownUnitError: If the token is not registered
        """
        if not isinstance(token, str):
            raise UnknownUnitError(str(token))
        cleaned = _clean_token(token)

        if len(cleaned) > 1 and cleaned.endswith('s'):
            singular = self.alias_lookup.get(cleaned[:-1])
            if singular is not None:
                return singular

        unit = self.alias_lookup.get(cleaned)
        if unit is None:
            raise UnknownUnitError(token)
        return unit

    def get_base_unit(self, category: Union[MeasurementCategory, str]) -> UnitDefinition:
        """Get the base unit for a category.

        Raises:
            UnknownUnitError: If category not found
        """
        try:
            return self.base_units[MeasurementCategory(category)]
        except (ValueError, KeyError):
            raise UnknownUnitError(
                str(category), f"Category '{category}' not in registry"
            ) from None

    def get_conversion_factor(self, from_token: str, to_token: str) -> float:
        """Get the factor that converts a value in one unit to another.

        Args:
            from_token: Source unit
            to_token: Target unit

        Returns:
            Multiplier from source to target

        Raises:
            UnknownUnitError: If either unit is not registered
            CategoryMismatchError: If units are from different categories
        """
        from_unit = self.resolve(from_token)
        to_unit = self.resolve(to_token)

        if from_unit.category != to_unit.category:
            raise CategoryMismatchError(
                f"Cannot convert between different categories: "
                f"{from_unit.token} ({from_unit.category.value}) to "
                f"{to_unit.token} ({to_unit.category.value})"
            )

        if from_unit.token == to_unit.token:
            return 1.0
        return from_unit.factor / to_unit.factor

    def validate_conversion(self, from_token: str, to_token: str) -> bool:
        """Check if conversion between two units is valid."""
        try:
            self.get_conversion_factor(from_token, to_token)
            return True
        except (UnknownUnitError, CategoryMismatchError):
            return False

    def get_supported_units(
        self,
        category: Optional[Union[MeasurementCategory, str]] = None
    ) -> Dict[str, List[str]]:
        """Get canonical unit tokens, base unit first, optionally for one category."""
        result: Dict[str, List[str]] = {}
        for cat, base in self.base_units.items():
            if category is not None and cat != category:
                continue
            others = [u.token for u in self.units.values() if u.category == cat and u is not base]
            result[cat.value] = [base.token] + others
        return result


@lru_cache(maxsize=None)
def _registry_for(units_path: str) -> UnitRegistry:
    return UnitRegistry(units_path)


def get_registry(units_path: Optional[Union[str, Path]] = None) -> UnitRegistry:
    """Process-wide registry, built once per unit table."""
    if units_path is None:
        units_path = settings.quantity.units_path
    return _registry_for(str(Path(units_path).resolve()))
