"""
Error taxonomy for IBAN validation.

Every gate of the validation pipeline has its own exception so callers can tell
"definitely not an IBAN" apart from "unknown country, please double-check".

Hierarchy:
    IbanError
    ├── IbanValidationError           -> the input is not a valid IBAN
    │   ├── InvalidCharactersError
    │   ├── MalformedHeaderError
    │   ├── UnsupportedCountryError   (advisory)
    │   ├── LengthMismatchError
    │   ├── BbanFormatMismatchError
    │   ├── ChecksumInvalidError
    │   └── ChecksumComputationError
    ├── RegistryDataError             -> broken entry in the country table
    └── FormatCompileError            -> broken layout descriptor
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    invalid_characters = "InvalidCharacters"
    malformed_header = "MalformedHeader"
    unsupported_country = "UnsupportedCountry"
    length_mismatch = "LengthMismatch"
    bban_format_mismatch = "BbanFormatMismatch"
    checksum_invalid = "ChecksumInvalid"
    checksum_computation_failed = "ChecksumComputationFailed"


class IbanError(Exception):
    """Base class for everything raised by ibancheck."""


class IbanValidationError(IbanError):
    """The input failed one of the validation gates. Never retryable."""

    kind: ErrorKind
    advisory = False

    def __init__(self, value: str, message: str) -> None:
        self.value = value
        super().__init__(message)


class InvalidCharactersError(IbanValidationError):
    kind = ErrorKind.invalid_characters

    def __init__(self, value: str) -> None:
        super().__init__(value, "IBAN can contain only alphanumeric characters")


class MalformedHeaderError(IbanValidationError):
    kind = ErrorKind.malformed_header

    def __init__(self, value: str) -> None:
        super().__init__(
            value,
            "IBAN must start with country code (2 letters) and check digits (2 digits)",
        )


class UnsupportedCountryError(IbanValidationError):
    """
    The country code is not in the registry.

    The table is a fixed snapshot and new countries keep joining the IBAN
    standard, so this only means "confirm with another validation source".
    """

    kind = ErrorKind.unsupported_country
    advisory = True

    def __init__(self, value: str, country_code: str) -> None:
        self.country_code = country_code
        super().__init__(
            value,
            f"Unsupported country code {country_code}; "
            "confirm with another IBAN validation source",
        )


class LengthMismatchError(IbanValidationError):
    kind = ErrorKind.length_mismatch

    def __init__(self, value: str, country_code: str, actual: int, expected: int) -> None:
        self.country_code = country_code
        self.actual = actual
        self.expected = expected
        super().__init__(
            value,
            f"IBAN length {actual} does not match length {expected} "
            f"specified for country code {country_code}",
        )


class BbanFormatMismatchError(IbanValidationError):
    kind = ErrorKind.bban_format_mismatch

    def __init__(self, value: str, country_code: str, format: str) -> None:
        self.country_code = country_code
        self.format = format
        super().__init__(
            value,
            f"BBAN part of IBAN is not formatted according to {country_code} layout {format}",
        )


class ChecksumInvalidError(IbanValidationError):
    kind = ErrorKind.checksum_invalid

    def __init__(self, value: str) -> None:
        super().__init__(value, "IBAN has incorrect check digits")


class ChecksumComputationError(IbanValidationError):
    """Raised when the mod-97 input holds something other than 0-9 / A-Z."""

    kind = ErrorKind.checksum_computation_failed

    def __init__(self, value: str) -> None:
        super().__init__(value, "IBAN check digits validation failed")


class FormatCompileError(IbanError):
    """A layout descriptor such as ``U04F10`` could not be compiled."""

    def __init__(self, format: str, detail: str) -> None:
        self.format = format
        self.detail = detail
        super().__init__(f"Cannot compile BBAN layout {format!r}: {detail}")


class RegistryDataError(IbanError):
    """
    A country entry in the registry is broken (bad descriptor, or a length that
    disagrees with its layout). This is a data bug, not a property of the input.
    """

    def __init__(self, country_code: str, detail: str) -> None:
        self.country_code = country_code
        self.detail = detail
        super().__init__(f"Invalid registry entry for {country_code}: {detail}")
