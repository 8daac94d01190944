"""Single entry point for turning user quantities into stored renderings."""

from typing import Optional

from recipe_book.common.config import settings

from .formatter import FractionFormatter
from .models import Rendering
from .normalizer import UnitNormalizer
from .parser import QuantityParser, RawValue
from .registry import UnitRegistry, get_registry


class Quantifiable:
    """Parses, normalizes and renders a (value, unit) pair."""

    def __init__(
        self,
        registry: UnitRegistry,
        significant_digits: int = 4,
        decimal_places: int = 2,
    ):
        self.registry = registry
        self.parser = QuantityParser(registry)
        self.normalizer = UnitNormalizer(registry, significant_digits)
        self.formatter = FractionFormatter(decimal_places)

    @classmethod
    def from_settings(cls) -> "Quantifiable":
        """Build with the process-wide registry and configured rounding."""
        config = settings.quantity
        return cls(
            get_registry(config.units_path),
            significant_digits=config.significant_digits,
            decimal_places=config.decimal_places,
        )

    def build(self, raw_value: RawValue, raw_unit: Optional[str]) -> Optional[Rendering]:
        """Build the rendering for a raw value and unit.

        The readable text shows what the user entered; the numeric field is
        the base-unit value used for aggregation and scaling.

        Returns:
            Rendering, or None when no quantity was supplied

        Raises:
            QuantityError: Any parser error, unchanged
        """
        quantity = self.parser.parse(raw_value, raw_unit)
        if quantity is None:
            return None

        normalized = self.normalizer.normalize(quantity)
        return Rendering(
            readable=self.formatter.render(quantity.value, quantity.unit),
            normalized=normalized.value,
            unit=quantity.unit.token,
        )


def build(raw_value: RawValue, raw_unit: Optional[str]) -> Optional[Rendering]:
    """Build a rendering with the default, settings-driven engine."""
    return Quantifiable.from_settings().build(raw_value, raw_unit)
