"""Shared state passed from the CLI group to its commands."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from wleddraw.exceptions import WledDrawError, format_error_for_display, wrap_pydantic_error

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    """Global options, applied on top of the config file."""

    config_file: Path
    api_url: Optional[str] = None
    offline: bool = False
    encoding: Optional[str] = None
    state_file: Optional[Path] = None

    def load_config(self):
        """Config file values with the command line overrides applied."""
        from wleddraw.models import AppConfig

        config = AppConfig.load_or_default(self.config_file)
        overrides: dict = {}
        if self.api_url:
            overrides["api_url"] = self.api_url
        if self.offline:
            overrides["offline"] = True
        if self.encoding:
            overrides["encoding"] = self.encoding
        if self.state_file:
            overrides["state_path"] = self.state_file
        if not overrides:
            return config
        try:
            return AppConfig.model_validate({**config.model_dump(), **overrides})
        except ValidationError as e:
            raise wrap_pydantic_error(e, "command line options") from e

    def open_app(self, ctx: click.Context, fetch_info: bool = False):
        """
        Build and start the application; it is shut down when the command ends.

        Shutdown flushes any pending frame to the device.
        """
        from wleddraw.core.application import WledDrawApp

        app = WledDrawApp(self.load_config())
        app.start(fetch_info=fetch_info)
        ctx.call_on_close(app.shutdown)
        return app


def fail(error: Exception) -> None:
    """Report an error the way every command does, then exit with status 1."""
    if isinstance(error, WledDrawError):
        logger.error(f"Command failed: {error.technical_message}")
    else:
        logger.exception("Command failed")
    message, hint = format_error_for_display(error)
    click.echo(f"Error: {message}", err=True)
    if hint:
        click.echo(f"Hint: {hint}", err=True)
    raise SystemExit(1)


def report_send_status(app) -> None:
    """Warn when the last frame did not reach the device."""
    if app.device.ignore_api:
        return
    if app.editor.send_error:
        error = app.editor.coalescer.last_error
        message, hint = format_error_for_display(error) if error else ("Frame was not delivered.", None)
        click.echo(f"Warning: {message} The drawing was saved locally.", err=True)
        if hint:
            click.echo(f"Hint: {hint}", err=True)
