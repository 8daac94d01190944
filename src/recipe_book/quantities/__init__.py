"""Quantity engine: unit registry, parsing, normalization and rendering."""

from .exceptions import (
    QuantityError,
    IncompleteQuantityError,
    InvalidNumberError,
    NegativeQuantityError,
    UnknownUnitError,
    CategoryMismatchError,
    ConversionDataError,
)
from .models import (
    MeasurementCategory,
    UnitDefinition,
    Quantity,
    NormalizedQuantity,
    Rendering,
)
from .registry import UnitRegistry, get_registry
from .parser import QuantityParser
from .normalizer import UnitNormalizer, round_significant
from .formatter import FractionFormatter
from .quantifiable import Quantifiable, build

__all__ = [
    'QuantityError',
    'IncompleteQuantityError',
    'InvalidNumberError',
    'NegativeQuantityError',
    'UnknownUnitError',
    'CategoryMismatchError',
    'ConversionDataError',
    'MeasurementCategory',
    'UnitDefinition',
    'Quantity',
    'NormalizedQuantity',
    'Rendering',
    'UnitRegistry',
    'get_registry',
    'QuantityParser',
    'UnitNormalizer',
    'round_significant',
    'FractionFormatter',
    'Quantifiable',
    'build',
]
