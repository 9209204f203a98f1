"""
Normalizers and the mod-97 checksum used by the IBAN parser.

Design principles
-----------------
- **Pure functions**: easy to test and reason about.
- **Fast**: O(n) over the candidate string; the checksum is reduced digit by
  digit so arbitrarily long inputs never build a huge integer.
"""

from __future__ import annotations

import re
import string

from .errors import ChecksumComputationError, ChecksumInvalidError

# Covers space, tab, newline, form feed, carriage return and unicode spaces.
_WHITESPACE = re.compile(r"\s+")

# ASCII-only case mapping: str.upper() would turn "ß" into "SS".
_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def normalize_iban(s: str) -> str:
    """
    Remove all whitespace and uppercase the rest.

    No validation happens here: ``"nl91 abna 0417 1643 00"`` becomes
    ``"NL91ABNA0417164300"`` and ``"n!l"`` becomes ``"N!L"``.
    """
    return _WHITESPACE.sub("", s or "").translate(_ASCII_UPPER)


def print_format(code: str, group: int = 4) -> str:
    """Split ``code`` into space-separated groups of ``group`` characters."""
    return " ".join(code[i : i + group] for i in range(0, len(code), group))


def mask_iban(code: str) -> str:
    """Keep the first and last four characters, star out the middle."""
    if len(code) < 8:
        return code
    return code[:4] + "*" * (len(code) - 8) + code[-4:]


def mod97(s: str) -> int:
    """
    Compute the ISO 7064 mod 97-10 remainder of an IBAN-shaped string.

    Steps:
      1) Move the first 4 chars to the end.
      2) Replace letters A..Z with 10..35.
      3) Reduce the resulting decimal string modulo 97, one digit at a time.

    Raises:
        ChecksumComputationError: a character is not an ASCII digit or A-Z.
    """
    rearranged = s[4:] + s[:4]

    rem = 0
    for ch in rearranged:
        if "0" <= ch <= "9":
            rem = (rem * 10 + (ord(ch) - 48)) % 97  # '0' -> 48
        elif "A" <= ch <= "Z":
            # Letters expand to two digits: A -> 10 ... Z -> 35.
            rem = (rem * 100 + (ord(ch) - 55)) % 97  # 'A' -> 65
        else:
            raise ChecksumComputationError(s)
    return rem


def validate_check_digits(code: str) -> None:
    """Raise ChecksumInvalidError unless ``code`` leaves remainder 1."""
    if mod97(code) != 1:
        raise ChecksumInvalidError(code)



def compute_check_digits(country_code: str, bban: str) -> str:
    """
    Return the two check digits that make ``country_code + digits + bban`` valid.

    Uses the standard trick: compute the remainder with ``00`` in place of the
    check digits and take ``98 - remainder``.
    """
    rem = mod97(f"{country_code}00{bban}".translate(_ASCII_UPPER))
    return f"{98 - rem:02d}"
