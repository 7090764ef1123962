# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console

from logarc_lib.core.click_format import GNUHelpColorsCommand
from logarc_lib.core.common import resolve_dest_dir, to_absolute
from logarc_lib.core.config import CFG
from logarc_lib.core.error import LogArcError
from logarc_lib.core.logger import get_logger

from .presenter import HistoryPresenter
from .recorder import HistoryRecorder

logger = get_logger(__name__)


@click.command(
    short_help="Show the archive history of a log directory.",
    help=f"""Show the archives created from a log directory, oldest first.

{click.style("LOG_DIR", fg="green")}   The directory whose archives should be listed.

The history is read from the `{CFG.history.file_name}` file in `LOG_DIR/{CFG.archiver.default_dest_dir_name}`
or in the directory specified using `--dest`.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "log_dir",
    type=click.Path(path_type=Path),
    metavar=click.style("LOG_DIR", fg="green"),
)
@click.option(
    "-d",
    "--dest",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Directory containing the archives. Defaults to 'LOG_DIR/{CFG.archiver.default_dest_dir_name}'.",
)
@click.option(
    "-n",
    "--last",
    type=click.IntRange(min=1),
    default=None,
    help="Show only the specified number of the most recent archives.",
)
def history(log_dir: Path, dest: Path | None, last: int | None) -> NoReturn:
    """
    Show the archive history of a log directory.
    """
    try:
        recorder = HistoryRecorder(resolve_dest_dir(to_absolute(log_dir), dest))
        entries = recorder.read()
        if not entries:
            logger.info(f"No archives recorded in '{recorder.path}'.")
            sys.exit(0)

        if last is not None:
            entries = entries[-last:]

        console = Console()
        console.print(HistoryPresenter(entries).createHistoryPanel(console))
        sys.exit(0)
    except LogArcError as e:
        logger.error(e)
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
