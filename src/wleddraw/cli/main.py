"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from wleddraw import __version__
from wleddraw.models.config import CONFIG_DIR, DEFAULT_CONFIG_PATH

from .commands import config, draw_commands, info, payload
from .context import CliState

logger = logging.getLogger(__name__)


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where log records go for the given flags."""
    if log_file:
        return log_file
    if debug:
        # Debug mode: log to current directory
        return Path.cwd() / "wleddraw-debug.log"
    return CONFIG_DIR / "logs" / "wleddraw.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for a custom log file (DEBUG/INFO/WARNING/ERROR)
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Explicit log level wins when logging to a custom file
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Keeps the last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="wleddraw")
@click.option(
    '--config-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help='Configuration file'
)
@click.option(
    '--api-url',
    type=str,
    default=None,
    help='WLED JSON API endpoint, e.g. http://192.168.1.50/json (overrides config)'
)
@click.option(
    '--offline',
    is_flag=True,
    default=False,
    help='Draw without contacting the device'
)
@click.option(
    '--encoding',
    type=click.Choice(['serpentine', 'row_major'], case_sensitive=False),
    default=None,
    help='LED addressing order of the matrix (overrides config)'
)
@click.option(
    '--state-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='File holding the drawing and undo history (overrides config)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./wleddraw-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for a custom log file (default: INFO)'
)
def cli(
    ctx,
    config_file: Path,
    api_url: Optional[str],
    offline: bool,
    encoding: Optional[str],
    state_file: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    wleddraw - pixel-art editor for WLED LED matrices.

    Every drawing command loads the saved drawing, applies the edit (which
    can be undone with `wleddraw undo`), saves it and sends the result to
    the device.

    \b
    Examples:
      # Show device info and sync the grid to its matrix size
      wleddraw --api-url http://192.168.1.50/json info

      # Paint one pixel, then fill the grid
      wleddraw pixel 3 4 '#ff0000'
      wleddraw fill '#000080'

      # Radial gradient with three stops
      wleddraw gradient --kind radial --stop '#ffffff@0' --stop '#ff9305@40' --stop '#000000@100'

      # Import a picture
      wleddraw image logo.png --brightness 120 --contrast 20

      # Print the JSON payload without sending anything
      wleddraw --offline payload
    """
    setup_logging(verbose, debug, log_file, log_level)
    ctx.obj = CliState(
        config_file=config_file,
        api_url=api_url,
        offline=offline,
        encoding=encoding.lower() if encoding else None,
        state_file=state_file,
    )


cli.add_command(info)
cli.add_command(payload)
cli.add_command(config)
for command in draw_commands:
    cli.add_command(command)


if __name__ == "__main__":
    cli()
