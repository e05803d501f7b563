"""Drawing command implementations."""

from pathlib import Path
from typing import Optional

import click

from wleddraw.cli.context import fail, report_send_status
from wleddraw.exceptions import GradientParameterError, WledDrawError

_EDIT_ERRORS = (WledDrawError, IndexError, ValueError)

RESAMPLE_FILTERS = ["nearest", "box", "bilinear", "hamming", "bicubic", "lanczos"]


def parse_stop(value: str) -> dict:
    """
    Parse a ``COLOR@POSITION`` stop, e.g. ``#ff0000@25``.

    Raises:
        GradientParameterError: If the value is not in that form
    """
    color, sep, position = value.rpartition("@")
    if not sep or not color:
        raise GradientParameterError("color_stops", value, "expected COLOR@POSITION, e.g. '#ff0000@25'")
    try:
        return {"color": color, "position": float(position)}
    except ValueError as e:
        raise GradientParameterError("color_stops", value, f"position {position!r} is not a number") from e


def _show_grid_summary(app) -> None:
    editor = app.editor
    undo_state = f"{len(editor.history)} undo step(s)" if editor.can_undo else "nothing to undo"
    click.echo(f"Grid {editor.width}x{editor.height}, {undo_state}")


@click.command()
@click.argument("x", type=int)
@click.argument("y", type=int)
@click.argument("color", required=False)
@click.pass_context
def pixel(ctx, x: int, y: int, color: Optional[str]):
    """Paint the pixel at column X, row Y (uses the current color if COLOR is omitted)."""
    try:
        app = ctx.obj.open_app(ctx)
        index = app.editor.grid.index_of(x, y)
        changed = app.editor.update_pixel(index, color or app.editor.current_color)
        app.editor.flush()
    except _EDIT_ERRORS as e:
        fail(e)

    if changed:
        led = app.editor.encoder.mapper.xy_to_led(x, y)
        click.echo(f"Painted ({x}, {y}) {app.editor.grid.get(index)} (LED {led})")
    else:
        click.echo(f"({x}, {y}) already {app.editor.grid.get(index)}, nothing to do")
    report_send_status(app)


@click.command()
@click.argument("color", required=False)
@click.option(
    "--index", "-i", "indices",
    type=int,
    multiple=True,
    help="Only paint these cell indices (repeatable); default is the whole grid",
)
@click.pass_context
def fill(ctx, color: Optional[str], indices: tuple[int, ...]):
    """Paint the whole grid (or the given cells) in COLOR as one undo step."""
    try:
        app = ctx.obj.open_app(ctx)
        targets = list(indices) or list(range(app.editor.grid.size))
        count = app.editor.batch_update_pixels(targets, color or app.editor.current_color)
        app.editor.draw_complete()
    except _EDIT_ERRORS as e:
        fail(e)

    click.echo(f"Filled {count} cell(s)")
    report_send_status(app)


@click.command()
@click.pass_context
def clear(ctx):
    """Blank the grid (undoable)."""
    try:
        app = ctx.obj.open_app(ctx)
        app.editor.clear()
    except _EDIT_ERRORS as e:
        fail(e)

    click.echo("Grid cleared")
    report_send_status(app)


@click.command()
@click.pass_context
def undo(ctx):
    """Revert the most recent edit."""
    try:
        app = ctx.obj.open_app(ctx)
        action = app.editor.undo()
    except _EDIT_ERRORS as e:
        fail(e)

    if action is None:
        click.echo("Nothing to undo")
        return
    click.echo(f"Undid {action.type} ({len(app.editor.history)} step(s) left)")
    report_send_status(app)


@click.command()
@click.argument("width", type=click.IntRange(min=1))
@click.argument("height", type=click.IntRange(min=1))
@click.pass_context
def resize(ctx, width: int, height: int):
    """
    Change the grid to WIDTH x HEIGHT.

    Cells keep their linear index, so existing drawings wrap to the new
    row length.
    """
    try:
        app = ctx.obj.open_app(ctx)
        app.editor.setup_grid(width, height)
    except _EDIT_ERRORS as e:
        fail(e)
    _show_grid_summary(app)


@click.command()
@click.argument("color", required=False)
@click.pass_context
def color(ctx, color: Optional[str]):
    """Select the drawing COLOR, or show the current color and palette."""
    try:
        app = ctx.obj.open_app(ctx)
        if color:
            app.editor.set_current_color(color)
    except _EDIT_ERRORS as e:
        fail(e)

    click.echo(f"Current color: {app.editor.current_color}")
    click.echo(f"Palette: {' '.join(app.editor.palette)}")


@click.command()
@click.option(
    "--kind", "-k",
    type=click.Choice(["linear", "radial", "elliptical"], case_sensitive=False),
    default=None,
    help="Gradient shape (default: linear)",
)
@click.option("--stop", "-s", "stops", multiple=True, help="Color stop COLOR@POSITION (2-4, repeatable)")
@click.option("--angle", type=int, default=None, help="Linear direction in degrees (0 = top to bottom)")
@click.option("--center-x", type=float, default=None, help="Radial/elliptical center X in percent")
@click.option("--center-y", type=float, default=None, help="Radial/elliptical center Y in percent")
@click.option("--rotation", type=int, default=None, help="Elliptical rotation in degrees")
@click.option("--scale", type=int, default=None, help="Zoom in percent (50-300)")
@click.pass_context
def gradient(ctx, kind, stops, angle, center_x, center_y, rotation, scale):
    """Fill the grid with a gradient (one undo step)."""
    from wleddraw.models import GradientSpec

    changes = {
        name: value
        for name, value in {
            "kind": kind.lower() if kind else None,
            "angle": angle,
            "center_x": center_x,
            "center_y": center_y,
            "rotation": rotation,
            "scale": scale,
        }.items()
        if value is not None
    }
    try:
        if stops:
            changes["color_stops"] = [parse_stop(stop) for stop in stops]
        spec, rejected = GradientSpec.resolve_params(changes)
        for field, reason in rejected.items():
            click.echo(f"Warning: ignoring invalid {field} ({reason}), using the default", err=True)
        app = ctx.obj.open_app(ctx)
        app.editor.apply_gradient(spec)
    except _EDIT_ERRORS as e:
        fail(e)

    stop_text = ", ".join(f"{stop.color}@{stop.position:g}" for stop in spec.sorted_stops())
    click.echo(f"Applied {spec.kind.value} gradient ({stop_text})")
    report_send_status(app)


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--brightness", "-b", type=float, default=100, show_default=True, help="Brightness in percent (0-200)")
@click.option("--contrast", "-c", type=float, default=0, show_default=True, help="Contrast in percent (-100-100)")
@click.option(
    "--filter", "resample",
    type=click.Choice(RESAMPLE_FILTERS, case_sensitive=False),
    default="nearest",
    show_default=True,
    help="Resampling filter",
)
@click.pass_context
def image(ctx, path: Path, brightness: float, contrast: float, resample: str):
    """Draw the picture at PATH scaled to the grid (one undo step)."""
    from PIL import Image

    from wleddraw.imaging import ImageSampler

    try:
        sampler = ImageSampler.from_file(
            path,
            brightness=brightness,
            contrast=contrast,
            resample=Image.Resampling[resample.upper()],
        )
        app = ctx.obj.open_app(ctx)
        app.editor.apply_image(sampler)
    except _EDIT_ERRORS as e:
        fail(e)

    click.echo(f"Applied {path.name} at {app.editor.width}x{app.editor.height}")
    report_send_status(app)


draw_commands = [pixel, fill, clear, undo, resize, color, gradient, image]
