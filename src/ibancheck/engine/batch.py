"""
Validate IBAN list files.

A list file holds one IBAN per line. Blank lines and lines starting with ``#``
are skipped. When walking a directory, dotfiles and files inside dot
directories are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from .parser import IbanParser, ValidationResult


@dataclass
class LineResult:
    path: str
    line_no: int
    raw: str
    result: ValidationResult


@dataclass
class BatchResult:
    files: int = 0
    lines: List[LineResult] = field(default_factory=list)

    @property
    def valid(self) -> int:
        return sum(1 for r in self.lines if r.result.ok)

    @property
    def unsupported(self) -> int:
        return sum(1 for r in self.lines if r.result.advisory)

    @property
    def invalid(self) -> int:
        return sum(1 for r in self.lines if not r.result.ok and not r.result.advisory)

    def failures(self) -> List[LineResult]:
        return [r for r in self.lines if not r.result.ok]


def iter_entries(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_no, text)`` for each non-blank, non-comment line (1-based)."""
    for no, line in enumerate(lines, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        yield no, text


class BatchChecker:
    def __init__(self, parser: Optional[IbanParser] = None) -> None:
        self.parser = parser or IbanParser()

    def check_lines(self, lines: Iterable[str], path: str = "<input>") -> List[LineResult]:
        return [
            LineResult(path=path, line_no=no, raw=text, result=self.parser.validate(text))
            for no, text in iter_entries(lines)
        ]

    def check_path(self, src: Path) -> BatchResult:
        """Check a single list file or every list file below a directory."""
        result = BatchResult()
        for p in self._iter_files(Path(src)):
            result.files += 1
            with p.open(encoding="utf-8", errors="replace") as fh:
                result.lines.extend(self.check_lines(fh, path=str(p)))
        return result

    def _iter_files(self, src: Path) -> Iterable[Path]:
        if src.is_file():
            yield src
            return
        for p in sorted(src.rglob("*")):
            rel = p.relative_to(src)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if p.is_file():
                yield p
