"""mkautonav - Generate nav and sidebar configuration from a documentation tree.

Scans the markdown files of a documentation source directory and writes
ordered, nested navigation data for a static-site generator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from mkautonav import __version__
from mkautonav.cache import NavCache
from mkautonav.generator import display_message, generate_navigation, load_site_config, write_output
from mkautonav.models import AutoNavError, MessageType
from mkautonav.validators import display_validation_results, validate_environment

# Initialize Rich console
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="mkautonav",
    help="Generate nav and sidebar configuration from a markdown documentation tree",
    add_completion=False,
    rich_markup_mode="rich",
)

DEFAULT_OUTPUT = "autonav.yml"


def handle_error(error: Exception, user_message: str | None = None) -> None:
    """Handle and display errors in a user-friendly way.

    Args:
        error: The exception that occurred
        user_message: Optional user-friendly explanation
    """
    error_msg = user_message or str(error)
    display_message(error_msg, MessageType.ERROR)
    raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    display_message(
        f"[bold cyan]mkautonav[/bold cyan] version [bold green]{__version__}[/bold green]",
        MessageType.INFO,
        title="Version Information",
    )


@app.command()
def generate(
    ctx: typer.Context,
    site_config: Annotated[
        Path,
        typer.Argument(help="Site configuration file (srcDir, srcExclude, cacheDir, nav, autoNav)", resolve_path=True),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help=f"Output file for nav and sidebar, .json or .yml (default: {DEFAULT_OUTPUT} next to the site config)",
            rich_help_panel="Output Options",
        ),
    ] = None,
    no_cache: Annotated[
        bool,
        typer.Option(
            "--no-cache", help="Ignore and do not update the timestamp cache", rich_help_panel="Cache Options"
        ),
    ] = False,
) -> None:
    """Generate nav and sidebar data for a documentation site.

    Args:
        ctx: Typer context
        site_config: Path to the site configuration file
        output: Output file path
        no_cache: Disable the persistent cache
    """
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    try:
        site = load_site_config(site_config)
        output_path = output or site_config.parent / DEFAULT_OUTPUT

        console.print(f"[blue]Generating navigation for [bold cyan]{site.src_dir}[/bold cyan]...[/blue]")
        result = generate_navigation(site, base_dir=site_config.parent, cache=NavCache() if no_cache else None)
        write_output(output_path, site)

        if verbose:
            console.print(f"[dim]Items: {result.item_count}, cache hits: {result.cache_hits}[/dim]")
            if result.nav is None:
                console.print("[dim]Site config defines nav; kept as configured[/dim]")

        display_message(
            f"Navigation written to [bold cyan]{output_path}[/bold cyan]",
            MessageType.SUCCESS,
            title="Generation Complete",
        )

    except typer.Exit:
        raise
    except FileNotFoundError as e:
        handle_error(e, str(e))
    except AutoNavError as e:
        handle_error(e, str(e))
    except Exception as e:
        handle_error(e, f"Navigation generation failed: {e}")


@app.command()
def check(
    site_config: Annotated[Path, typer.Argument(help="Site configuration file to validate", resolve_path=True)],
) -> None:
    """Validate the environment and site configuration.

    Args:
        site_config: Path to the site configuration file
    """
    console.print()
    all_passed, results = validate_environment(site_config)
    display_validation_results(results, title="Site Validation")
    console.print()

    if not all_passed:
        display_message(
            "Validation failed - please fix the issues above before generating.",
            MessageType.ERROR,
            title="Validation Failed",
        )
        raise typer.Exit(1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context, verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output")] = False
) -> None:
    """Mkautonav - navigation generator for documentation trees."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)

    ctx.obj = {"verbose": verbose}


if __name__ == "__main__":
    app()
