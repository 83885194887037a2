"""Command-line interface for video header generation."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from videohpp.generator import ValidationError, parse, render_cppm, render_hpp

if TYPE_CHECKING:
    from videohpp.generator.types import VideoRegistry

DEFAULT_VIDEO_XML = "Vulkan-Docs/xml/video.xml"
HPP_FILE = "vulkan_video.hpp"
CPPM_FILE = "vulkan_video.cppm"

logger = logging.getLogger("videohpp")


def _load(filename: str) -> VideoRegistry:
    """Read and parse a registry file, exiting on any failure."""
    logger.info("Loading %s", filename)
    try:
        with open(filename, encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        print(f"failed to load file {filename}: {e.strerror}")
        sys.exit(1)

    logger.info("Parsing %s", filename)
    try:
        return parse(text)
    except ValidationError as e:
        print(f"Registry error in {filename}: {e}")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug output")
def cli(verbose: bool) -> None:
    """Vulkan video C++ header generator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@cli.command()
@click.option(
    "--file", "-f", "filename", default=DEFAULT_VIDEO_XML, help="Input video registry file"
)
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
def gen(filename: str, output_path: str) -> None:
    """Generate vulkan_video.hpp and vulkan_video.cppm from a registry file."""
    registry = _load(filename)

    hpp = render_hpp(registry)
    cppm = render_cppm(registry)

    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    for name, content in ((HPP_FILE, hpp), (CPPM_FILE, cppm)):
        logger.info("Generating %s", output_dir / name)
        (output_dir / name).write_text(content, encoding="utf-8")


@cli.command()
@click.option(
    "--file", "-f", "filename", default=DEFAULT_VIDEO_XML, help="Input video registry file"
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(filename: str, output_json: bool) -> None:
    """Display extensions and their resolved type order."""
    registry = _load(filename)

    if output_json:
        print(registry.to_json(indent=2))
    else:
        _output_plain(registry)


def _output_plain(registry: VideoRegistry) -> None:
    """Output registry info using rich text formatting."""
    console = Console()

    console.print("[bold cyan]Extensions[/bold cyan]")
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Number", style="green", justify="right")
    table.add_column("Name", style="white")
    table.add_column("Depends", style="dim")
    table.add_column("Guard", style="dim")
    table.add_column("Constants", style="yellow", justify="right")
    table.add_column("Types", style="yellow", justify="right")

    for extension in registry.extensions:
        table.add_row(
            str(extension.number),
            extension.name,
            extension.depends or "",
            extension.protect,
            str(len(extension.require.constants)),
            str(len(extension.require.types)),
        )

    console.print(table)
    console.print()

    for extension in registry.extensions:
        console.print(f"[bold cyan]{extension.name}[/bold cyan]")
        type_table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        type_table.add_column("Type", style="white")
        type_table.add_column("Category", style="dim")
        for name in extension.require.types:
            type_table.add_row(name, str(registry.category_of(name)))
        console.print(type_table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
