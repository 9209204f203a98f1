"""
Country rule registry.

What this does
--------------
- Loads the static country table (``countries.yaml``) shipped with the package.
- Optionally merges init-time entries from configuration (``extra``) and drops
  codes listed in ``exclude``. There is no way to change the table afterwards.
- Compiles each country's BBAN layout on first use and caches the pattern.

The compile cache is a plain dict filled with ``setdefault``: two threads that
validate the same new country at once may both compile, but the patterns are
equivalent and whichever lands first is kept.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from importlib import resources
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Mapping, Optional

import yaml

from ..errors import FormatCompileError, RegistryDataError
from .compiler import Layout, compile_layout, layout_length, parse_format

if TYPE_CHECKING:
    from ..config import RegistryConfig

logger = logging.getLogger(__name__)

# IBAN header: 2-letter country code + 2 check digits.
HEADER_LENGTH = 4


@dataclass(frozen=True)
class CountryRule:
    """
    Length and BBAN layout for one country.

    Attributes:
        code:   ISO 3166 alpha-2 country code (uppercase).
        length: Full IBAN length, header included.
        format: Layout descriptor as stored in the table (e.g. ``U04F10``).
    """
    code: str
    length: int
    format: str

    @property
    def layout(self) -> Layout:
        return parse_format(self.format)

    @property
    def bban_length(self) -> int:
        return self.length - HEADER_LENGTH


def _load_table(package: str, resource: str) -> Dict[str, Dict[str, Any]]:
    text = resources.files(package).joinpath(resource).read_text()
    data = yaml.safe_load(text) or {}
    return data.get("countries", {}) or {}


def _rule(code: str, entry: Mapping[str, Any]) -> CountryRule:
    return CountryRule(code=str(code), length=int(entry["length"]), format=str(entry["format"]))


class CountryRegistry:
    """
    Read-only mapping of country code -> :class:`CountryRule` with a lazily
    filled cache of compiled BBAN matchers.
    """

    def __init__(
        self,
        extra: Optional[Mapping[str, Mapping[str, Any]]] = None,
        exclude: Iterable[str] = (),
        package: str = "ibancheck.rules",
        resource: str = "countries.yaml",
    ) -> None:
        self._rules: Dict[str, CountryRule] = {}
        self._matchers: Dict[str, re.Pattern] = {}

        for code, entry in _load_table(package, resource).items():
            self._rules[code] = _rule(code, entry)

        # Init-time additions/overrides from configuration.
        for code, entry in (extra or {}).items():
            self._rules[code.upper()] = _rule(code.upper(), entry)

        for code in exclude:
            self._rules.pop(code.upper(), None)

        logger.debug("Loaded %d country rules", len(self._rules))

    @classmethod
    def from_config(cls, cfg: "RegistryConfig") -> "CountryRegistry":
        extra = {code: spec.model_dump() for code, spec in cfg.extra_countries.items()}
        return cls(extra=extra, exclude=cfg.exclude)

    # -- Lookup ---------------------------------------------------------------------------

    def get(self, code: str) -> Optional[CountryRule]:
        return self._rules.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[CountryRule]:
        for code in self.codes():
            yield self._rules[code]

    def codes(self) -> List[str]:
        return sorted(self._rules)

    # -- Matchers -------------------------------------------------------------------------

    def matcher(self, code: str) -> re.Pattern:
        """
        Return the compiled BBAN pattern for ``code``, compiling it on first use.

        Raises:
            KeyError: ``code`` is not registered.
            RegistryDataError: the entry's descriptor does not compile, or its
                length disagrees with the layout.
        """
        pattern = self._matchers.get(code)
        if pattern is not None:
            return pattern

        rule = self._rules[code]
        try:
            layout = rule.layout
            pattern = compile_layout(layout)
        except FormatCompileError as e:
            logger.error("Country %s has a broken layout %r: %s", code, rule.format, e.detail)
            raise RegistryDataError(code, str(e)) from e

        if rule.length != HEADER_LENGTH + layout_length(layout):
            logger.error("Country %s length %d disagrees with layout %s", code, rule.length, rule.format)
            raise RegistryDataError(
                code,
                f"length {rule.length} != {HEADER_LENGTH} + {layout_length(layout)} from layout {rule.format}",
            )

        logger.debug("Compiled BBAN layout for %s: %s", code, pattern.pattern)
        return self._matchers.setdefault(code, pattern)


_default: Optional[CountryRegistry] = None


def default_registry() -> CountryRegistry:
    """Process-wide registry built from the shipped table on first use."""
    global _default
    if _default is None:
        _default = CountryRegistry()
    return _default
