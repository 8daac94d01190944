"""Value types passed between the quantity engine stages."""

import enum
import math
from dataclasses import asdict, dataclass, field
from typing import Dict, FrozenSet, Union

from .exceptions import InvalidNumberError, NegativeQuantityError


class MeasurementCategory(str, enum.Enum):
    """Measurement categories. Units never convert across categories."""
    VOLUME = "volume"
    MASS = "mass"
    COUNT = "count"
    TIME = "time"


@dataclass(frozen=True)
class UnitDefinition:
    """A recognized unit and how it relates to its category's base unit."""
    token: str
    category: MeasurementCategory
    factor: float
    singular: str
    plural: str
    aliases: FrozenSet[str] = field(default_factory=frozenset, compare=False)

    def display(self, plural: bool) -> str:
        return self.plural if plural else self.singular


@dataclass(frozen=True)
class Quantity:
    """A non-negative, finite amount in a resolved unit."""
    value: float
    unit: UnitDefinition

    def __post_init__(self):
        if not math.isfinite(self.value):
            raise InvalidNumberError(f"Quantity value must be finite: {self.value}")
        if self.value < 0:
            raise NegativeQuantityError(f"Negative quantity: {self.value} {self.unit.token}")
        if not math.isfinite(self.value * self.unit.factor):
            raise InvalidNumberError(
                f"Quantity too large to express in base units: {self.value} {self.unit.token}"
            )


@dataclass(frozen=True)
class NormalizedQuantity:
    """A quantity expressed in its category's base unit."""
    value: float
    unit: UnitDefinition
    category: MeasurementCategory


@dataclass(frozen=True)
class Rendering:
    """Display text plus the normalized value handed back to callers."""
    readable: str
    normalized: float
    unit: str

    def as_record(self) -> Dict[str, Union[str, float]]:
        """Plain dict suitable for storing alongside a recipe."""
        return asdict(self)
