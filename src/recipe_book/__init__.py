"""Recipe book backend core: quantity engine and recipe record mapping."""

__version__ = "0.1.0"
