"""
Runs the validation gates in order and builds ParsedIban values.

Gates (the first failure wins, later gates are never evaluated):
  1) characters  -> only 0-9 and A-Z after normalization
  2) header      -> 2 letters + 2 digits
  3) country     -> code known to the registry (advisory failure)
  4) length      -> exact length for that country
  5) BBAN layout -> full match against the compiled country layout
  6) checksum    -> mod-97 remainder of 1
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from ..errors import (
    BbanFormatMismatchError,
    ErrorKind,
    IbanValidationError,
    InvalidCharactersError,
    LengthMismatchError,
    MalformedHeaderError,
    UnsupportedCountryError,
)
from ..rules.registry import HEADER_LENGTH, CountryRegistry, default_registry
from ..validators import mask_iban, normalize_iban, print_format, validate_check_digits

logger = logging.getLogger(__name__)

_ALNUM_UPPER = re.compile(r"[0-9A-Z]*")
_HEADER = re.compile(r"[A-Z]{2}[0-9]{2}")


@dataclass(frozen=True)
class ParsedIban:
    """
    A validated IBAN.

    Attributes:
        code:         Normalized IBAN (uppercase, no whitespace).
        print_code:   ``code`` in groups of four for printing on paper.
        country_code: First two characters.
        check_digits: Characters 3-4.
        bban:         Country-specific remainder.
    """
    code: str
    print_code: str
    country_code: str
    check_digits: str
    bban: str

    def masked(self) -> str:
        return mask_iban(self.code)

    def __str__(self) -> str:
        return self.print_code


@dataclass
class ValidationResult:
    iban: Optional[ParsedIban] = None
    error: Optional[IbanValidationError] = None

    @property
    def ok(self) -> bool:
        return self.iban is not None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    @property
    def advisory(self) -> bool:
        return self.error is not None and self.error.advisory


class IbanParser:
    """Validate IBAN strings against a country registry."""

    def __init__(self, registry: Optional[CountryRegistry] = None) -> None:
        self.registry = registry if registry is not None else default_registry()

    def parse(self, value: str) -> ParsedIban:
        """
        Validate ``value`` and return the parsed IBAN.

        Raises:
            IbanValidationError: a subclass naming the first failed gate.
            RegistryDataError: the country's table entry is broken.
        """
        code = normalize_iban(value)

        if not _ALNUM_UPPER.fullmatch(code):
            raise InvalidCharactersError(code)

        if not _HEADER.match(code):
            raise MalformedHeaderError(code)
        country_code = code[0:2]
        check_digits = code[2:4]

        rule = self.registry.get(country_code)
        if rule is None:
            raise UnsupportedCountryError(code, country_code)

        if len(code) != rule.length:
            raise LengthMismatchError(code, country_code, len(code), rule.length)

        bban = code[HEADER_LENGTH:]
        if not self.registry.matcher(country_code).fullmatch(bban):
            raise BbanFormatMismatchError(code, country_code, rule.format)

        validate_check_digits(code)

        return ParsedIban(
            code=code,
            print_code=print_format(code),
            country_code=country_code,
            check_digits=check_digits,
            bban=bban,
        )

    def validate(self, value: str) -> ValidationResult:
        """Like :meth:`parse` but reports validation failures in the result."""
        try:
            return ValidationResult(iban=self.parse(value))
        except IbanValidationError as e:
            logger.debug("Rejected %s: %s", mask_iban(e.value), e.kind.value)
            return ValidationResult(error=e)


def parse_iban(value: str) -> ParsedIban:
    return IbanParser().parse(value)


def validate(value: str) -> ValidationResult:
    return IbanParser().validate(value)
