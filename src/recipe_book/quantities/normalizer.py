"""Normalization of quantities to their category's base unit."""

import math
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Union

from .exceptions import InvalidNumberError
from .models import NormalizedQuantity, Quantity
from .parser import QuantityParser
from .registry import UnitRegistry


def round_significant(value: float, digits: int = 4) -> float:
    """Round to a number of significant digits, ties to even.

    The float's shortest repr is rounded, not its binary expansion, so
    0.125 rounded to 2 digits gives 0.12 and 12345 to 4 digits gives 12340.
    """
    if value == 0:
        return 0.0
    exact = Decimal(repr(float(value)))
    exponent = exact.adjusted() - digits + 1
    return float(exact.quantize(Decimal(1).scaleb(exponent), rounding=ROUND_HALF_EVEN))


class UnitNormalizer:
    """Normalizes quantities to base units using registry factors."""

    def __init__(self, registry: UnitRegistry, significant_digits: int = 4):
        self.registry = registry
        self.significant_digits = significant_digits

    def normalize(self, quantity: Quantity) -> NormalizedQuantity:
        """Express a quantity in the base unit of its category.

        Args:
            quantity: Parsed quantity

        Returns:
            NormalizedQuantity rounded to the configured significant digits
        """
        unit = quantity.unit
        base_unit = self.registry.get_base_unit(unit.category)
        return NormalizedQuantity(
            value=round_significant(quantity.value * unit.factor, self.significant_digits),
            unit=base_unit,
            category=unit.category,
        )

    def convert(self, value: Union[int, float, str], from_token: str, to_token: str) -> float:
        """Convert a value between two units of the same category.

        The result is not rounded; rounding happens only in normalize().

        Raises:
            InvalidNumberError: If the value or the result is not a finite number
            NegativeQuantityError: If the value is below zero
            UnknownUnitError: If either unit is not registered
            CategoryMismatchError: If units are from different categories
        """
        amount = QuantityParser.parse_number(value)
        converted = amount * self.registry.get_conversion_factor(from_token, to_token)
        if not math.isfinite(converted):
            raise InvalidNumberError(f"Conversion of {value} {from_token} to {to_token} overflows")
        return converted
