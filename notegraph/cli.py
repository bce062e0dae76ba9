#!/usr/bin/env python3
# notegraph/cli.py
import logging
import sys
from typing import Optional

import click
import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from notegraph import config, state
from notegraph.exceptions import ModelLoadError, RenderError
from notegraph.renderer import MarkupRenderer

console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_or_exit(input_dir: str, render: bool):
    try:
        return state.init_model(input_dir, render=render)
    except ModelLoadError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)


input_dir_option = click.option(
    "--input-dir", "-i",
    envvar="NOTES_PATH",
    required=True,
    type=click.Path(),
    help="Directory of note files",
)


@click.group()
@click.option("--log-level", default=config.get_log_level, show_default="INFO", help="Logging level")
def cli(log_level: str):
    """Notegraph: serve a directory of notes as a graph"""
    configure_logging(log_level)


@cli.command()
@input_dir_option
@click.option("--host", default=config.get_host, show_default="127.0.0.1")
@click.option("--port", default=config.get_port, type=int, show_default="8080")
@click.option("--render/--no-render", default=config.get_render_markup, help="Render Typst bodies to SVG")
def serve(input_dir: str, host: str, port: int, render: bool):
    """Load the notes and start the API server"""
    from notegraph.main import app

    model = load_or_exit(input_dir, render)
    console.print(f"[green]✓[/green] Loaded {len(model)} notes from {escape(input_dir)}")
    uvicorn.run(app, host=host, port=port)


@cli.command()
@input_dir_option
@click.option("--render/--no-render", default=False, help="Render Typst bodies to SVG")
def nodes(input_dir: str, render: bool):
    """List the notes of a directory"""
    model = load_or_exit(input_dir, render)

    if not len(model):
        console.print("[yellow]No notes found[/yellow]")
        return

    table = Table(title=f"Notes ({len(model)})")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Short")
    table.add_column("Rendered", justify="center")

    for node in model:
        table.add_row(escape(node.id), escape(node.title), escape(node.short), "✓" if node.rendered_body else "")

    console.print(table)


@cli.command()
@input_dir_option
@click.option("--workers", type=click.IntRange(min=1), default=config.get_graph_workers, help="Extraction threads")
def edges(input_dir: str, workers: Optional[int]):
    """List the references between notes"""
    model = load_or_exit(input_dir, render=False)
    edge_list = model.get_edges(max_workers=workers)

    if not edge_list:
        console.print("[yellow]No edges found[/yellow]")
        return

    table = Table(title=f"Edges ({len(edge_list)})")
    table.add_column("From", style="cyan")
    table.add_column("To", style="magenta")
    for source, target in edge_list:
        table.add_row(escape(source), escape(target))

    console.print(table)


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
def render(source):
    """Render a Typst snippet to SVG on stdout"""
    renderer = MarkupRenderer(
        font_dirs=config.get_font_dirs(),
        allow_embedded_fonts=config.get_allow_embedded_fonts(),
    )
    try:
        svg = renderer.render(source.read())
    except RenderError as e:
        console.print(f"[red]Render failed:[/red] {escape(str(e))}")
        for line in getattr(e, "diagnostics", []):
            console.print(f"  {escape(line)}")
        sys.exit(1)
    click.echo(svg)


if __name__ == "__main__":
    cli()
