"""Click CLI for docrender: render PDF pages to images with caching."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.tree import Tree

from docrender.config.hierarchy import load_config_hierarchy
from docrender.config.logger import configure_logging
from docrender.config.schema import AppConfig, ImageConfig, LoggerConfig, build_app_config
from docrender.errors.exceptions import DocRenderError
from docrender.render import available_renderers
from docrender.types import ConversionResult

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, config: LoggerConfig) -> None:
    """Install a rich handler and apply the configured level and -v count."""
    level = configure_logging(config, verbosity)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )


def _load_config(**overrides: Any) -> AppConfig:
    try:
        return build_app_config(load_config_hierarchy(**overrides))
    except DocRenderError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="docrender")
def cli() -> None:
    """docrender: render document pages to images with a persistent cache."""


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(file_okay=False), default="output",
              show_default=True, help="Output directory.")
@click.option("--page", "page_spec", default="", help="Pages: 3, 1,3,5, 2:5, 2:, :3 (default all).")
@click.option("--format", "fmt", type=click.Choice(["png", "jpg", "jpeg"]), default=None,
              help="Output format.")
@click.option("--dpi", type=click.IntRange(min=1), default=None, help="Rendering density.")
@click.option("--quality", type=click.IntRange(1, 100), default=None, help="JPEG quality.")
@click.option("--renderer", type=click.Choice(available_renderers()), default=None,
              help="Rendering backend.")
@click.option("--cache-dir", type=click.Path(file_okay=False), default=None,
              help="Cache directory.")
@click.option("--no-cache", is_flag=True, default=False, help="Disable caching.")
@click.option("--base64", "include_base64", is_flag=True, default=False,
              help="Also write base64 data URI files.")
@click.option("--brightness", type=click.IntRange(0, 200), default=None,
              help="Brightness 0-200 (100 = neutral).")
@click.option("--contrast", type=click.IntRange(-100, 100), default=None,
              help="Contrast -100 to +100 (0 = neutral).")
@click.option("--saturation", type=click.IntRange(0, 200), default=None,
              help="Saturation 0-200 (100 = neutral).")
@click.option("--rotation", type=click.IntRange(0, 360), default=None,
              help="Rotation in degrees.")
@click.option("--background", default=None, help="Background colour (default white).")
@click.option("--workers", type=click.IntRange(min=1), default=None,
              help="Pages rendered concurrently.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def convert(
    input_path: str,
    output: str,
    page_spec: str,
    fmt: str | None,
    dpi: int | None,
    quality: int | None,
    renderer: str | None,
    cache_dir: str | None,
    no_cache: bool,
    include_base64: bool,
    brightness: int | None,
    contrast: int | None,
    saturation: int | None,
    rotation: int | None,
    background: str | None,
    workers: int | None,
    verbose: int,
) -> None:
    """Render PDF pages to images."""
    config = _load_config(
        format=fmt,
        dpi=dpi,
        quality=quality,
        renderer=renderer,
        cache_dir=cache_dir,
        cache_disabled=no_cache or None,
        max_workers=workers,
    )
    _setup_logging(verbose, config.logging)

    # Only explicitly passed filters enter the options (and the cache key)
    filters = {
        "brightness": brightness,
        "contrast": contrast,
        "saturation": saturation,
        "rotation": rotation,
        "background": background,
    }
    explicit = {k: v for k, v in filters.items() if v is not None}
    config.image.merge(ImageConfig(options=explicit))

    from docrender.core import Converter

    try:
        converter = Converter(config)
        _print_header(input_path, output, config)
        result = converter.convert(input_path, output, page_spec, include_base64)
    except (DocRenderError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    _print_summary(result)
    if result.pages_failed:
        sys.exit(1)


def _print_header(input_path: str, output: str, config: AppConfig) -> None:
    settings = config.image.finalize()
    console.print(f"Converting: [cyan]{input_path}[/cyan]")
    console.print(f"Format: {settings.format.upper()} @ {settings.dpi} DPI ({config.renderer})")
    console.print(f"Output: {output}")
    if config.cache_disabled:
        console.print("Cache: disabled")
    else:
        console.print(f"Cache: {config.cache.name} {config.cache.options.get('directory', '')}")


def _print_summary(result: ConversionResult) -> None:
    table = Table(title="Rendered Pages", show_header=True)
    table.add_column("Page", style="cyan")
    table.add_column("Size")
    table.add_column("Time")
    table.add_column("Status")
    for page in result.pages:
        if page.ok:
            table.add_row(
                str(page.page_number), _format_bytes(len(page.data)),
                _format_ms(page.elapsed_ms), "[green]ok[/green]",
            )
        else:
            table.add_row(str(page.page_number), "-", _format_ms(page.elapsed_ms),
                          f"[red]{page.error}[/red]")
    console.print(table)

    console.print(f"Rendered {len(result.pages)} page(s) in {_format_ms(result.elapsed_ms)}")
    for path in result.written:
        console.print(f"  - {path}")


@cli.group()
def cache() -> None:
    """Cache management commands."""


def _cache_dir_option(fn: Any) -> Any:
    return click.option(
        "--cache-dir", type=click.Path(file_okay=False), default=None, help="Cache directory."
    )(fn)


@cache.command("clear")
@_cache_dir_option
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
def cache_clear(cache_dir: str | None) -> None:
    """Remove every cached image."""
    from docrender.cache.registry import register_builtin_caches

    config = _load_config(cache_dir=cache_dir)
    try:
        store = register_builtin_caches().create(config.cache)
        store.clear()
    except DocRenderError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    console.print("[green]Cache cleared.[/green]")


@cache.command("inspect")
@_cache_dir_option
def cache_inspect(cache_dir: str | None) -> None:
    """Show the cache directory structure."""
    from docrender.cache.stats import inspect_cache

    config = _load_config(cache_dir=cache_dir)
    stats = inspect_cache(config.cache.options.get("directory", ""))
    if not stats.exists:
        console.print(f"Cache directory {stats.directory} does not exist (empty cache)")
        return
    if not stats.entries:
        console.print("Cache is empty")
        return

    tree = Tree(f"{stats.directory} ({stats.entries} entries)")
    for listing in stats.listings:
        branch = tree.add(f"[cyan]{listing.key}[/cyan]")
        for f in listing.files:
            branch.add(f"{f.name} ({_format_bytes(f.size_bytes)})")
    console.print(tree)


@cache.command("stats")
@_cache_dir_option
def cache_stats(cache_dir: str | None) -> None:
    """Show cache statistics."""
    from docrender.cache.stats import inspect_cache

    config = _load_config(cache_dir=cache_dir)
    stats = inspect_cache(config.cache.options.get("directory", ""))

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Directory", stats.directory)
    table.add_row("Entries", str(stats.entries))
    table.add_row("Files", str(stats.files))
    table.add_row("Size", _format_bytes(stats.size_bytes))
    table.add_row("Status", stats.status)
    console.print(table)


@cache.command("backends")
def cache_backends() -> None:
    """List registered cache backends."""
    from docrender.cache.registry import register_builtin_caches

    for name in register_builtin_caches().list_caches():
        console.print(name)


def _format_ms(ms: float) -> str:
    return f"{ms:.0f}ms" if ms < 1000 else f"{ms / 1000:.2f}s"


def _format_bytes(size: int) -> str:
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def main() -> None:
    """Entry point for the CLI."""
    cli()
