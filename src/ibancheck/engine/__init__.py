"""Validation pipeline and batch checking."""

from .batch import BatchChecker, BatchResult, LineResult
from .parser import IbanParser, ParsedIban, ValidationResult, parse_iban, validate

__all__ = [
    "BatchChecker",
    "BatchResult",
    "IbanParser",
    "LineResult",
    "ParsedIban",
    "ValidationResult",
    "parse_iban",
    "validate",
]
