"""Human-readable rendering of quantities with vulgar fractions."""

import math
from fractions import Fraction
from typing import Optional, Sequence

from .models import UnitDefinition

WHOLE_EPSILON = 1e-6
FRACTION_TOLERANCE = 1 / 64
DENOMINATORS = (2, 3, 4, 8)


class FractionFormatter:
    """Renders numbers as whole numbers, mixed fractions or short decimals."""

    def __init__(
        self,
        decimal_places: int = 2,
        denominators: Sequence[int] = DENOMINATORS,
        tolerance: float = FRACTION_TOLERANCE,
    ):
        self.decimal_places = decimal_places
        self.denominators = tuple(denominators)
        self.tolerance = tolerance

    def render(self, value: float, unit: UnitDefinition) -> str:
        """Render a value followed by the unit's display form.

        Examples:
            1.5 cup -> "1 1/2 cups"
            1 tsp   -> "1 teaspoon"
            0.3 cup -> "0.3 cups"
        """
        number = self.format_number(value)
        return f"{number} {unit.display(plural=number != '1')}"

    def format_number(self, value: float) -> str:
        whole = math.floor(value)
        remainder = value - whole

        if remainder <= WHOLE_EPSILON:
            return str(whole)
        if 1 - remainder <= WHOLE_EPSILON:
            return str(whole + 1)

        fraction = self._closest_fraction(remainder)
        if fraction is None:
            return self._format_decimal(value)
        if whole == 0:
            return f"{fraction.numerator}/{fraction.denominator}"
        return f"{whole} {fraction.numerator}/{fraction.denominator}"

    def _closest_fraction(self, remainder: float) -> Optional[Fraction]:
        """Closest proper fraction within tolerance; earlier denominators win ties."""
        best = None
        best_error = None
        for denominator in self.denominators:
            numerator = round(remainder * denominator)
            if not 0 < numerator < denominator:
                continue
            error = abs(remainder - numerator / denominator)
            if error > self.tolerance:
                continue
            if best_error is None or error < best_error:
                best = Fraction(numerator, denominator)
                best_error = error
        return best

    def _format_decimal(self, value: float) -> str:
        text = f"{value:.{self.decimal_places}f}"
        if '.' in text:
            text = text.rstrip('0').rstrip('.')
        return text
