"""
ChestGUI CLI

Command-line interface for compiling layout configs without the editor.
"""

import runpy
from pathlib import Path
from typing import Optional, Tuple

import typer

from chestgui import logger
from chestgui.api.compiler import export_chest_json, generate_all_configs
from chestgui.core.configs import EditorConfig
from chestgui.utils.image import read_rgba, write_rgba
from chestgui.utils.preview import composite_preview, draw_grid_overlay
from chestgui.utils.utils import layout_from_config

# Create main app
app = typer.Typer(
    name="chestgui",
    help="ChestGUI - chest GUI offset editor and chest.json generator",
    add_completion=False,
    invoke_without_command=True,
)

# Create CLI subcommand group
cli = typer.Typer(help="Command-line interface operations")
app.add_typer(cli, name="cli")

# Create export subcommands under cli
export_app = typer.Typer(help="Descriptor export operations")
cli.add_typer(export_app, name="export")


def load_layout(config: Path):
    """
    Run a layout config file and read the placements from its
    ``layout_config`` dictionary.
    """
    if not config.exists():
        typer.echo(f"Error: Config file not found: {config}", err=True)
        raise typer.Exit(1)

    config_globals = runpy.run_path(str(config))
    if "layout_config" not in config_globals:
        typer.echo("Error: Config file must define 'layout_config' dictionary", err=True)
        raise typer.Exit(1)
    return layout_from_config(config_globals["layout_config"])


@app.callback()
def main_callback(ctx: typer.Context):
    """
    ChestGUI - chest GUI offset editor and chest.json generator

    Run without arguments to launch the GUI.
    Use 'chestgui cli' to see command-line interface options.
    """
    if ctx.invoked_subcommand is None:
        from chestgui.window.app import run as gui_run

        gui_run(project_dir=".", configs_file=None)


@app.command()
def gui(
    project_dir: str = typer.Option(
        ".", help="The project directory to use for the application."
    ),
    configs_file: Optional[str] = typer.Option(
        None,
        help="Python file with an EditorConfig subclass.",
    ),
):
    """
    Launch the ChestGUI editor.
    """
    from chestgui.window.app import run as gui_run

    gui_run(project_dir=project_dir, configs_file=configs_file)


@export_app.command("full")
def export_full(
    config: Path = typer.Argument(..., help="Python layout config file"),
    output: Path = typer.Option(
        Path("."), "-o", "--output", help="Directory to write chest.json into"
    ),
):
    """
    Write the full chest.json descriptor for a layout config.

    Example config.py:
        layout_config = {
            'placements': [
                {'name': 'my-chest', 'offset': (0, -2), 'size': (176, 166), 'preset': 'row6'},
                {'name': 'barrel', 'offset': (-45, -44), 'size': (176, 133), 'preset': 'row1'},
            ]
        }
    """
    try:
        placements = load_layout(config)
        path = export_chest_json(placements, output, EditorConfig())
        typer.echo(f"✓ Wrote {len(placements)} placements to: {path}")
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        logger.exception(e)
        raise typer.Exit(1)


@export_app.command("snippet")
def export_snippet(
    config: Path = typer.Argument(..., help="Python layout config file"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="File to write; prints when omitted"
    ),
):
    """
    Print the per-item config blocks for a layout config.
    """
    try:
        placements = load_layout(config)
        snippet = generate_all_configs(placements, EditorConfig())
        if output:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(snippet, encoding="utf-8")
            typer.echo(f"✓ Saved to: {output}")
        else:
            typer.echo(snippet)
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        logger.exception(e)
        raise typer.Exit(1)


@cli.command()
def preview(
    config: Path = typer.Argument(..., help="Python layout config file"),
    image: Path = typer.Argument(..., help="GUI image to place"),
    output: Path = typer.Option(
        Path("preview.png"), "-o", "--output", help="Output image path"
    ),
    index: int = typer.Option(
        -1, "--index", help="Which placement of the config to render"
    ),
    viewport: Tuple[int, int] = typer.Option(
        (640, 480), "--viewport", help="Viewport width and height"
    ),
    show_grid: bool = typer.Option(True, "--grid/--no-grid", help="Draw the grid"),
    opacity: float = typer.Option(0.35, "--opacity", help="Grid opacity 0.0-1.0"),
):
    """
    Render a preview of one placement over its alignment grid.
    """
    try:
        placements = load_layout(config)
        if not placements:
            typer.echo("Error: Config has no placements", err=True)
            raise typer.Exit(1)
        placement = placements[index]

        rgba = read_rgba(image)
        if rgba is None:
            typer.echo(f"Error: Failed to load image: {image}", err=True)
            raise typer.Exit(1)

        frame = composite_preview(
            viewport,
            placement,
            rgba,
            draw_grid_overlay(placement.preset),
            show_grid,
            opacity,
        )
        saved_path = write_rgba(output, frame)
        typer.echo(f"✓ Saved to: {saved_path}")
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        logger.exception(e)
        raise typer.Exit(1)


@cli.command()
def info(
    image: Path = typer.Argument(..., help="Image file to inspect"),
):
    """
    Display the intrinsic size of an image file.
    """
    if not image.exists():
        typer.echo(f"Error: Image not found: {image}", err=True)
        raise typer.Exit(1)

    rgba = read_rgba(image)
    if rgba is None:
        typer.echo(f"Error: Failed to load image: {image}", err=True)
        raise typer.Exit(1)

    height, width = rgba.shape[:2]
    typer.echo(f"Image: {image}")
    typer.echo(f"  Size: {width} x {height}")
    typer.echo(f"  Name: {image.stem}")
    typer.echo(f"  File size: {image.stat().st_size / 1024:.2f} KB")


@cli.command()
def version():
    """Show ChestGUI version."""
    from chestgui import __version__

    typer.echo(f"ChestGUI version {__version__}")


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
