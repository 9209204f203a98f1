"""
Compile BBAN layout descriptors into regular expressions.

A descriptor is a run of ``<class><count>`` tokens, e.g. ``U04F10`` means
"4 uppercase letters followed by 10 digits". The count is always two decimal
digits. The compiled pattern is meant for ``fullmatch`` so nothing before or
after the layout is accepted.
"""

from __future__ import annotations

import re
from typing import Dict, Sequence, Tuple

from ..errors import FormatCompileError

Layout = Tuple[Tuple[str, int], ...]

# Single-letter class code -> regex character class.
CHARACTER_CLASSES: Dict[str, str] = {
    "F": "[0-9]",
    "L": "[a-z]",
    "U": "[A-Z]",
    "A": "[0-9A-Za-z]",
    "B": "[0-9A-Z]",
    "C": "[A-Za-z]",
    "W": "[0-9a-z]",
}

_TOKEN = re.compile(r"([ABCFLUW])([0-9]{2})")
_DESCRIPTOR = re.compile(r"(?:[ABCFLUW][0-9]{2})+")


def parse_format(descriptor: str) -> Layout:
    """
    Split a descriptor into ``(class, count)`` pairs.

    The whole descriptor must be made of tokens; stray characters are an error
    rather than being skipped.
    """
    if not _DESCRIPTOR.fullmatch(descriptor or ""):
        raise FormatCompileError(descriptor, "expected a sequence of <class><2 digits> tokens")

    layout = []
    for cls, count in _TOKEN.findall(descriptor):
        repeat = int(count)
        if repeat <= 0:
            raise FormatCompileError(descriptor, f"repeat count must be positive, got {count!r}")
        layout.append((cls, repeat))
    return tuple(layout)


def compile_layout(layout: Sequence[Tuple[str, int]]) -> re.Pattern:
    """Build one pattern from layout pairs. Use it with ``fullmatch``."""
    parts = []
    for cls, repeat in layout:
        char_class = CHARACTER_CLASSES.get(cls)
        if char_class is None:
            raise FormatCompileError(_describe(layout), f"unknown character class {cls!r}")
        if not isinstance(repeat, int) or repeat <= 0:
            raise FormatCompileError(_describe(layout), f"repeat count must be positive, got {repeat!r}")
        parts.append(f"{char_class}{{{repeat}}}")

    try:
        return re.compile("".join(parts))
    except re.error as e:
        raise FormatCompileError(_describe(layout), str(e)) from e


def compile_format(descriptor: str) -> re.Pattern:
    return compile_layout(parse_format(descriptor))


def layout_length(layout: Sequence[Tuple[str, int]]) -> int:
    return sum(repeat for _, repeat in layout)


def _describe(layout: Sequence[Tuple[str, int]]) -> str:
    return "".join(f"{cls}{repeat}" for cls, repeat in layout)
