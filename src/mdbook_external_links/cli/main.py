"""CLI main entry point using Typer."""

import sys

import typer
from rich.console import Console
from rich.markup import escape

from mdbook_external_links import __version__
from mdbook_external_links.config.settings import DEFAULT_LOG_LEVEL, VALID_LOG_LEVELS
from mdbook_external_links.logging_config import setup_logging
from mdbook_external_links.preprocessor import (
    ExternalLinksPreprocessor,
    check_version,
    parse_input,
    write_output,
)

app = typer.Typer(
    name="mdbook-external-links",
    help='A mdbook preprocessor that adds \'target="_blank"\' to anchor tags',
    add_completion=False,
    pretty_exceptions_enable=False,
)

# stdout is reserved for the processed book
console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"mdbook-external-links {__version__}")
        raise typer.Exit()


def handle_preprocessing(preprocessor: ExternalLinksPreprocessor) -> None:
    """Read the book from stdin, rewrite it and write it to stdout."""
    ctx, book = parse_input(sys.stdin)
    check_version(ctx)
    processed = preprocessor.run(ctx, book)
    write_output(processed, sys.stdout)


@app.callback(invoke_without_command=True)
def preprocess(
    ctx: typer.Context,
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL,
        "--log-level",
        "-l",
        help=f"Logging level ({'/'.join(VALID_LOG_LEVELS)})",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Rewrite the book read from stdin; used by mdbook when no subcommand is given."""
    if log_level.upper() not in VALID_LOG_LEVELS:
        console.print(f"[red]✗[/red] Invalid log level: {escape(log_level)}", style="bold")
        raise typer.Exit(code=2)
    setup_logging(log_level, console)

    if ctx.invoked_subcommand is not None:
        return

    try:
        handle_preprocessing(ExternalLinksPreprocessor())
    except Exception as e:
        console.print(f"[red]✗[/red] {escape(str(e))}", style="bold", highlight=False)
        raise typer.Exit(code=1)


@app.command()
def supports(
    renderer: str = typer.Argument(..., help="Renderer name, e.g. html"),
) -> None:
    """Check whether a renderer is supported by this preprocessor."""
    supported = ExternalLinksPreprocessor().supports_renderer(renderer)
    raise typer.Exit(code=0 if supported else 1)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
