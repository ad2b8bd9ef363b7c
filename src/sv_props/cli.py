"""sv-props: per-site statistics for genotyped SV VCF/BCF files."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import PropsConfig, load_config
from .errors import ConfigValidationError, UnsupportedGenotypeError, VCFOpenError
from .pipeline import process_vcf


def version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


app = typer.Typer(
    name="sv-props",
    help="Compute allele frequency, missingness and support summaries per SV site",
    add_completion=False,
)
err_console = Console(stderr=True)


def setup_logging(verbose: bool, quiet: bool, log_level: str | None = None) -> None:
    """Configure logging based on verbosity flags.

    Data goes to stdout, so logging stays on stderr at WARNING unless asked.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    elif log_level:
        level = getattr(logging, log_level)
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger("sv_props").setLevel(level)


@app.command()
def props(
    vcf_path: Annotated[Path, typer.Argument(help="Input SV VCF/BCF file (plain or bgzipped)")],
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML file with an [sv_props] table")
    ] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    """Write one tab-separated statistics row per SV record to stdout."""
    try:
        config = load_config(config_file) if config_file else PropsConfig()
    except ConfigValidationError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None

    setup_logging(verbose, quiet, config.log_level)
    logger = logging.getLogger(__name__)

    try:
        process_vcf(vcf_path, sys.stdout, config)
    except VCFOpenError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None
    except UnsupportedGenotypeError as e:
        logger.debug("Aborting on record %s", e.record_id)
        prefix = f"record {e.record_id}: " if e.record_id is not None else ""
        err_console.print(f"[red]Error: {escape(prefix + str(e))}[/red]")
        raise typer.Exit(1) from None
    finally:
        sys.stdout.flush()


def main() -> None:
    """Console entry point; usage errors exit with status 1 instead of 2."""
    try:
        app()
    except SystemExit as e:
        if e.code == 2:
            sys.exit(1)
        raise


if __name__ == "__main__":
    main()
