"""Quantity parser for raw (value, unit) input."""

import math
import re
from typing import Optional, Union

from .exceptions import (
    IncompleteQuantityError,
    InvalidNumberError,
    NegativeQuantityError,
)
from .models import Quantity
from .registry import UnitRegistry

RawValue = Union[int, float, str, None]

_DECIMAL_PATTERN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)$')


def _is_absent(raw) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


class QuantityParser:
    """Turns user-supplied value and unit into a validated Quantity."""

    def __init__(self, registry: UnitRegistry):
        self.registry = registry

    def parse(self, raw_value: RawValue, raw_unit: Optional[str]) -> Optional[Quantity]:
        """Parse a raw value and unit.

        Args:
            raw_value: Number, decimal string, or None
            raw_unit: Unit token, or None

        Returns:
            Quantity, or None when neither value nor unit was supplied

        Raises:
            IncompleteQuantityError: If only one of value and unit is present
            InvalidNumberError: If the value is not a finite decimal number,
                or is too large to express in the base unit
            NegativeQuantityError: If the value is below zero
            UnknownUnitError: If the unit is not registered
        """
        value_absent = _is_absent(raw_value)
        unit_absent = _is_absent(raw_unit)

        if value_absent and unit_absent:
            return None
        if value_absent:
            raise IncompleteQuantityError(f"Unit '{raw_unit}' given without a quantity")
        if unit_absent:
            raise IncompleteQuantityError(f"Quantity '{raw_value}' given without a unit")

        value = self.parse_number(raw_value)
        unit = self.registry.resolve(raw_unit)
        return Quantity(value=value, unit=unit)

    @staticmethod
    def parse_number(raw_value: Union[int, float, str]) -> float:
        """Coerce a raw value to a finite, non-negative float."""
        if isinstance(raw_value, bool):
            raise InvalidNumberError(f"Not a number: {raw_value!r}")

        if isinstance(raw_value, str):
            text = raw_value.strip()
            if not _DECIMAL_PATTERN.match(text):
                raise InvalidNumberError(f"Not a decimal number: '{raw_value}'")
            value = float(text)
        elif isinstance(raw_value, (int, float)):
            try:
                value = float(raw_value)
            except OverflowError:
                raise InvalidNumberError(f"Quantity must be finite: {raw_value!r}") from None
        else:
            raise InvalidNumberError(f"Not a number: {raw_value!r}")

        if not math.isfinite(value):
            raise InvalidNumberError(f"Quantity must be finite: {raw_value!r}")
        if value < 0:
            raise NegativeQuantityError(f"Negative quantity: {raw_value}")

        # -0.0 becomes 0.0
        return value + 0.0
