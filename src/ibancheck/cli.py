from __future__ import annotations

import pathlib
import re
from typing import List, Optional

import typer
import structlog
from rich.console import Console
from rich.table import Table

from .config import load_config, IbanCheckConfig
from .engine.batch import BatchChecker, BatchResult
from .engine.parser import IbanParser, ValidationResult
from .errors import ErrorKind
from .rules.registry import CountryRegistry
from .validators import compute_check_digits, mask_iban

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="ibancheck — offline IBAN validator")

# Exit codes: any hard failure wins over advisory (unknown country) failures.
EXIT_INVALID = 1
EXIT_UNSUPPORTED = 2

_IBAN_LIKE = re.compile(r"\b[A-Z]{2}[0-9]{2}[0-9A-Z]{4,}\b")


def mask_ibans(_, __, event_dict: dict) -> dict:
    """structlog processor: never write full account numbers to the logs."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _IBAN_LIKE.sub(lambda m: mask_iban(m.group(0)), value)
    return event_dict


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"ibancheck {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to .ibancheck.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(processors=[mask_ibans, structlog.processors.JSONRenderer()])
    cfg = load_config(config) if config else IbanCheckConfig()
    ctx.obj = {"config": cfg, "registry": CountryRegistry.from_config(cfg.registry), "verbose": verbose}
    if verbose:
        log.info("verbose_enabled", countries=len(ctx.obj["registry"]))


def _display(code: str, print_code: str, cfg: IbanCheckConfig) -> str:
    if cfg.output.mask:
        return mask_iban(code)
    return print_code if cfg.output.printable else code


def _exit_code(results: List[ValidationResult]) -> int:
    if any(not r.ok and not r.advisory for r in results):
        return EXIT_INVALID
    if any(r.advisory for r in results):
        return EXIT_UNSUPPORTED
    return 0


@app.command()
def check(
    ctx: typer.Context,
    values: List[str] = typer.Argument(..., help="IBANs to validate (quote values containing spaces)"),
    mask: bool = typer.Option(False, "--mask", help="Hide the middle of each IBAN in the output"),
    suggest: bool = typer.Option(False, "--suggest", help="On checksum failure, show the expected check digits"),
):
    """Validate one or more IBANs."""
    cfg: IbanCheckConfig = ctx.obj["config"]
    if mask:
        cfg = cfg.model_copy(update={"output": cfg.output.model_copy(update={"mask": True})})
    parser = IbanParser(ctx.obj["registry"])

    results = []
    for value in values:
        result = parser.validate(value)
        results.append(result)
        if result.ok:
            console.print(f"[green]valid[/green]   {_display(result.iban.code, result.iban.print_code, cfg)}")
            continue

        err = result.error
        shown = mask_iban(err.value) if cfg.output.mask else err.value
        colour = "yellow" if result.advisory else "red"
        console.print(f"[{colour}]{err.kind.value}[/{colour}] {shown}: {err}")
        if ctx.obj["verbose"]:
            log.info("iban_rejected", value=err.value, kind=err.kind.value)
        if suggest and err.kind is ErrorKind.checksum_invalid:
            console.print(f"  expected check digits: {compute_check_digits(err.value[:2], err.value[4:])}")

    raise typer.Exit(code=_exit_code(results))


@app.command()
def scan(
    ctx: typer.Context,
    src: pathlib.Path = typer.Argument(..., exists=True, help="IBAN list file or directory (one IBAN per line)"),
):
    """Validate IBAN list files; blank lines and '#' comments are skipped."""
    cfg: IbanCheckConfig = ctx.obj["config"]
    checker = BatchChecker(IbanParser(ctx.obj["registry"]))
    result: BatchResult = checker.check_path(src)

    for line in result.failures():
        err = line.result.error
        shown = mask_iban(err.value) if cfg.output.mask else line.raw
        colour = "yellow" if line.result.advisory else "red"
        console.print(f"{line.path}:{line.line_no}: [{colour}]{err.kind.value}[/{colour}] {shown}")

    console.print(
        f"Scanned {result.files} files: {result.valid} valid, "
        f"{result.invalid} invalid, {result.unsupported} unsupported country"
    )
    if ctx.obj["verbose"]:
        log.info("scan_complete", files=result.files, valid=result.valid, invalid=result.invalid)
    raise typer.Exit(code=_exit_code([line.result for line in result.lines]))


@app.command()
def countries(ctx: typer.Context):
    """List supported countries with IBAN length and BBAN layout."""
    registry: CountryRegistry = ctx.obj["registry"]
    table = Table("Country", "Length", "Layout")
    for rule in registry:
        table.add_row(rule.code, str(rule.length), rule.format)
    console.print(table)
    console.print(f"{len(registry)} countries")
