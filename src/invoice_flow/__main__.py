"""CLI entry point for invoice-flow."""

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path

import click

from .adapters.profile import load_profile
from .adapters.render import HtmlRenderer, PdfRenderer
from .adapters.sequence import JsonFileSequenceStore
from .adapters.storage import FilesystemArtifactStorage, read_file_or_literal
from .config import Settings, load_settings
from .domain.errors import InvoiceFlowError
from .domain.schema import SCHEMAS, json_schema
from .domain.services import InvoiceService

DOCUMENT_TYPES = click.Choice(["invoice", "quote"])


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_service(settings: Settings) -> InvoiceService:
    return InvoiceService(
        store_factory=JsonFileSequenceStore,
        state_path=settings.paths.state_file,
    )


def fail(error: Exception) -> None:
    """Report a single-line diagnostic and exit non-zero."""
    click.echo(str(error), err=True)
    sys.exit(1)


def input_options(func: Callable) -> Callable:
    """Shared --input and --profile options."""
    func = click.option(
        "--profile",
        "profile_path",
        required=True,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Business profile JSON path",
    )(func)
    func = click.option(
        "--input", "input_arg", required=True, help="JSON file path or raw text"
    )(func)
    return func


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.version_option(package_name="invoice-flow")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """Invoice Flow - AU invoice and quote generator."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


def _generate(
    ctx: click.Context,
    input_arg: str,
    profile_path: Path,
    document_type: str | None,
    out: Path | None,
) -> None:
    settings = load_settings(ctx.obj["config_path"])
    service = build_service(settings)
    renderer = PdfRenderer(
        page_size=settings.render.page_size, quote_scale=settings.render.quote_scale
    )

    try:
        result = service.generate(
            read_file_or_literal(input_arg),
            load_profile(profile_path),
            storage=FilesystemArtifactStorage(out or settings.paths.output),
            renderer=renderer,
            document_type=document_type,
        )
    except (InvoiceFlowError, OSError) as e:
        fail(e)

    click.echo("Generated:")
    for path in result.paths:
        click.echo(f"- {path}")


@cli.command()
@input_options
@click.option("--type", "document_type", type=DOCUMENT_TYPES, help="Force document type")
@click.option("--out", type=click.Path(file_okay=False, path_type=Path), help="Output directory")
@click.pass_context
def generate(
    ctx: click.Context,
    input_arg: str,
    profile_path: Path,
    document_type: str | None,
    out: Path | None,
) -> None:
    """Generate PDF + normalized JSON + validation report."""
    _generate(ctx, input_arg, profile_path, document_type, out)


@cli.command()
@input_options
@click.option("--out", type=click.Path(file_okay=False, path_type=Path), help="Output directory")
@click.pass_context
def quote(ctx: click.Context, input_arg: str, profile_path: Path, out: Path | None) -> None:
    """Generate a quote PDF + JSON artifacts."""
    _generate(ctx, input_arg, profile_path, "quote", out)


@cli.command()
@input_options
@click.option("--type", "document_type", type=DOCUMENT_TYPES, help="Force document type")
@click.pass_context
def validate(
    ctx: click.Context, input_arg: str, profile_path: Path, document_type: str | None
) -> None:
    """Validate invoice input and profile, then print JSON report."""
    settings = load_settings(ctx.obj["config_path"])
    service = build_service(settings)

    try:
        report = service.validate(
            read_file_or_literal(input_arg), load_profile(profile_path), document_type
        )
    except (InvoiceFlowError, OSError) as e:
        fail(e)

    click.echo(json.dumps(report.to_dict(), indent=2))
    if not report.valid:
        sys.exit(1)


@cli.command()
@input_options
@click.option("--type", "document_type", type=DOCUMENT_TYPES, help="Force document type")
@click.option("--out", type=click.Path(file_okay=False, path_type=Path), help="Output directory")
@click.option("--html", "print_html", is_flag=True, help="Print HTML to stdout")
@click.pass_context
def preview(
    ctx: click.Context,
    input_arg: str,
    profile_path: Path,
    document_type: str | None,
    out: Path | None,
    print_html: bool,
) -> None:
    """Render an HTML preview without generating a PDF."""
    settings = load_settings(ctx.obj["config_path"])
    service = build_service(settings)

    try:
        result = service.generate(
            read_file_or_literal(input_arg),
            load_profile(profile_path),
            storage=FilesystemArtifactStorage(out or settings.paths.output),
            renderer=HtmlRenderer(),
            document_type=document_type,
            write_json=False,
        )
    except (InvoiceFlowError, OSError) as e:
        fail(e)

    if print_html:
        click.echo(result.document_path.read_text(encoding="utf-8"))
    else:
        click.echo(f"Preview HTML written to {result.document_path}")


@cli.command()
@click.argument("name", type=click.Choice(sorted(SCHEMAS)))
def schema(name: str) -> None:
    """Print the JSON Schema for a document kind."""
    click.echo(json.dumps(json_schema(name), indent=2))


if __name__ == "__main__":
    cli()
