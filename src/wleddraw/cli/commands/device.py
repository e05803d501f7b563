"""Device command implementations."""

import click

from wleddraw.cli.context import fail, report_send_status
from wleddraw.exceptions import WledDrawError


@click.command()
@click.pass_context
def info(ctx):
    """Query the device and sync the grid to its matrix size."""
    try:
        app = ctx.obj.open_app(ctx)
    except WledDrawError as e:
        fail(e)

    click.echo(f"API URL: {app.config.api_url}")
    if app.device.ignore_api:
        click.echo("Offline mode: device not contacted")
    else:
        device_info = app.device.refresh()
        if device_info is None:
            fail(app.device.last_error or WledDrawError("No answer from device"))

        click.echo(f"Web UI: {app.device.client.base_url}")
        click.echo(f"Name: {device_info.name or 'unknown'}")
        click.echo(f"Version: {device_info.version or 'unknown'}")
        if device_info.led_count:
            click.echo(f"LEDs: {device_info.led_count}")
        if device_info.has_matrix:
            click.echo(f"Matrix: {device_info.matrix_width}x{device_info.matrix_height}")
        else:
            click.echo("Matrix: not configured (using saved grid size)")

    editor = app.editor
    click.echo(f"Grid: {editor.width}x{editor.height} ({editor.encoder.mode.value})")
    click.echo(f"Brightness: {editor.encoder.brightness}")
    click.echo(f"Debounce: {editor.coalescer.delay_ms} ms")


@click.command()
@click.option("--send", is_flag=True, help="Also send the payload to the device")
@click.pass_context
def payload(ctx, send: bool):
    """Print the JSON state payload for the current drawing (e.g. to save as a preset)."""
    try:
        app = ctx.obj.open_app(ctx)
        body = app.editor.export_payload()
        if send:
            app.editor.coalescer.send_immediate()
    except WledDrawError as e:
        fail(e)

    click.echo(body)
    if send:
        report_send_status(app)
