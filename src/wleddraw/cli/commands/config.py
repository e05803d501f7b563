"""
Config command group.

Commands:
    - config show [FIELD]          # Display configuration
    - config set FIELD VALUE       # Validate, update and save one field
    - config reset [FIELD ...]     # Reset fields (or everything) to defaults
"""

from pathlib import Path

import click
from pydantic import ValidationError

from wleddraw.cli.context import fail
from wleddraw.exceptions import WledDrawError, wrap_pydantic_error
from wleddraw.models import AppConfig

FIELD_NAMES = list(AppConfig.model_fields)


def _config_path(ctx) -> Path:
    return ctx.obj.config_file


def _load(ctx) -> AppConfig:
    try:
        return AppConfig.load_or_default(_config_path(ctx))
    except WledDrawError as e:
        fail(e)


def _display_value(value) -> str:
    return getattr(value, "value", value) if not isinstance(value, Path) else str(value)


@click.group(name="config")
def config():
    """Configure wleddraw settings."""
    pass


@config.command(name="show")
@click.argument("field", required=False, type=click.Choice(FIELD_NAMES))
@click.pass_context
def show(ctx, field):
    """Display configuration values (all, or one FIELD)."""
    cfg = _load(ctx)
    fields = [field] if field else FIELD_NAMES
    click.echo(f"Configuration ({_config_path(ctx)}):")
    for name in fields:
        click.echo(f"  {name}: {_display_value(getattr(cfg, name))}")


@config.command(name="set")
@click.argument("field", type=click.Choice(FIELD_NAMES))
@click.argument("value")
@click.pass_context
def set_field(ctx, field, value):
    """Set FIELD to VALUE and save."""
    cfg = _load(ctx)
    path = _config_path(ctx)
    try:
        updated = AppConfig.model_validate({**cfg.model_dump(), field: value})
        updated.save(path)
    except ValidationError as e:
        fail(wrap_pydantic_error(e, str(path)))
    except (WledDrawError, OSError) as e:
        fail(e)
    click.echo(f"{field} = {_display_value(getattr(updated, field))}")


@config.command(name="reset")
@click.argument("fields", nargs=-1, type=click.Choice(FIELD_NAMES))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset(ctx, fields, yes):
    """Reset FIELDS (or the whole configuration) to defaults."""
    path = _config_path(ctx)
    if not fields and not yes:
        click.confirm("Reset the whole configuration to defaults?", abort=True)

    defaults = AppConfig()
    if fields:
        cfg = _load(ctx)
        data = cfg.model_dump()
        for name in fields:
            data[name] = getattr(defaults, name)
        updated = AppConfig.model_validate(data)
    else:
        updated = defaults

    try:
        updated.save(path)
    except (WledDrawError, OSError) as e:
        fail(e)
    reset_names = ", ".join(fields) if fields else "all fields"
    click.echo(f"Reset {reset_names} to defaults")
