"""Offline IBAN validation: normalization, country layouts and the mod-97 check."""

__version__ = "0.1.0"

from .engine.parser import IbanParser, ParsedIban, ValidationResult, parse_iban, validate
from .errors import (
    BbanFormatMismatchError,
    ChecksumComputationError,
    ChecksumInvalidError,
    ErrorKind,
    FormatCompileError,
    IbanError,
    IbanValidationError,
    InvalidCharactersError,
    LengthMismatchError,
    MalformedHeaderError,
    RegistryDataError,
    UnsupportedCountryError,
)
from .rules.registry import CountryRegistry, CountryRule, default_registry
from .validators import compute_check_digits, normalize_iban, print_format

__all__ = [
    "BbanFormatMismatchError",
    "ChecksumComputationError",
    "ChecksumInvalidError",
    "CountryRegistry",
    "CountryRule",
    "ErrorKind",
    "FormatCompileError",
    "IbanError",
    "IbanParser",
    "IbanValidationError",
    "InvalidCharactersError",
    "LengthMismatchError",
    "MalformedHeaderError",
    "ParsedIban",
    "RegistryDataError",
    "UnsupportedCountryError",
    "ValidationResult",
    "compute_check_digits",
    "default_registry",
    "normalize_iban",
    "parse_iban",
    "print_format",
    "validate",
]
