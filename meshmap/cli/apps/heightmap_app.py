"""Typer application for heightmap generation."""
import typer
from pathlib import Path
from typing import Optional
from rich.panel import Panel

from ..core import console, print_error, setup_logging
from ..commands.heightmap import build_config, convert_mesh_command, info_command, preview_command
from ...exceptions import HeightMapException


def _config_or_exit(**kwargs):
    try:
        return build_config(**kwargs)
    except HeightMapException as e:
        print_error(str(e))
        raise typer.Exit(1)


def create_app() -> typer.Typer:
    """Create the meshmap command-line application."""
    app = typer.Typer(
        help="Convert 3D meshes into regular heightmaps",
        add_completion=False
    )

    @app.callback()
    def main_callback(
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
    ):
        """MeshMap - build terrain heightmaps from mesh vertices."""
        setup_logging(verbose)

    @app.command("convert")
    def convert(
        mesh_file: Path = typer.Argument(..., help="Mesh or point file", exists=True),
        output_file: Path = typer.Argument(..., help="Output file (.npy, .raw, .r32, .png)"),
        size: Optional[int] = typer.Option(None, "--size", "-s", help="Edge length of the heightmap"),
        look_around: Optional[int] = typer.Option(None, "--look-around", "-l", help="Gap filling window (even)"),
        up_axis: Optional[str] = typer.Option(None, "--up-axis", "-u", help="Vertical axis of the mesh (y or z)"),
        workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Threads used for aggregation"),
        height_scale: Optional[float] = typer.Option(None, "--height-scale", help="Height scale factor"),
        normalize: Optional[float] = typer.Option(None, "--normalize", "-n", help="Rescale heights to [0, value]"),
        config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON configuration file"),
    ):
        """Convert a mesh into a heightmap file."""
        config = _config_or_exit(
            config_file=config_file, size=size, look_around=look_around,
            up_axis=up_axis, workers=workers, height_scale=height_scale,
        )
        if not convert_mesh_command(mesh_file, output_file, config, normalize=normalize):
            raise typer.Exit(1)

    @app.command("info")
    def info(
        mesh_file: Path = typer.Argument(..., help="Mesh or point file", exists=True),
        up_axis: str = typer.Option("y", "--up-axis", "-u", help="Vertical axis of the mesh (y or z)"),
    ):
        """Show vertex count and extent of a mesh."""
        if not info_command(mesh_file, up_axis=up_axis):
            raise typer.Exit(1)

    @app.command("preview")
    def preview(
        mesh_file: Path = typer.Argument(..., help="Mesh or point file", exists=True),
        output_file: Path = typer.Argument(..., help="Preview image path"),
        size: Optional[int] = typer.Option(None, "--size", "-s", help="Edge length of the heightmap"),
        look_around: Optional[int] = typer.Option(None, "--look-around", "-l", help="Gap filling window (even)"),
        up_axis: Optional[str] = typer.Option(None, "--up-axis", "-u", help="Vertical axis of the mesh (y or z)"),
        mode: str = typer.Option("2d", "--mode", "-m", help="Plot mode (2d or 3d)"),
        config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON configuration file"),
    ):
        """Render a heightmap preview image."""
        config = _config_or_exit(config_file=config_file, size=size, look_around=look_around, up_axis=up_axis)
        if not preview_command(mesh_file, output_file, config, mode=mode):
            raise typer.Exit(1)

    @app.command("version")
    def version():
        """Show version information."""
        from meshmap import __version__ as core_version
        from meshmap.cli import __version__ as cli_version

        console.print(Panel.fit(
            f"[bold]MeshMap Command-Line Interface[/bold]\n\n"
            f"CLI Version: {cli_version}\n"
            f"Core Version: {core_version}\n"
        ))

    return app
