"""Country rule table and BBAN layout compiler."""

from .compiler import CHARACTER_CLASSES, compile_format, compile_layout, parse_format
from .registry import CountryRegistry, CountryRule, default_registry

__all__ = [
    "CHARACTER_CLASSES",
    "CountryRegistry",
    "CountryRule",
    "compile_format",
    "compile_layout",
    "default_registry",
    "parse_format",
]
