# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click
from click_option_group import optgroup

from logarc_lib.core.click_format import GNUHelpColorsCommand
from logarc_lib.core.config import CFG
from logarc_lib.core.error import HistoryError, LogArcError
from logarc_lib.core.logger import get_logger
from logarc_lib.history.recorder import HistoryRecorder

from .archiver import ArchiveRequest, ArchiveResult, Archiver

logger = get_logger(__name__)


@click.command(
    short_help="Archive the files of a log directory.",
    help=f"""Archive the regular files of a log directory into a timestamped gzip-compressed tar file.

{click.style("LOG_DIR", fg="green")}   The directory containing the files to archive.

Only the files directly inside LOG_DIR are archived. Subdirectories, already compressed files
(`.gz`, `.tgz`, `.tar.gz`) and the history file are skipped.

The archive is written to `LOG_DIR/{CFG.archiver.default_dest_dir_name}` unless `--dest` is specified
and every run is recorded in the `{CFG.history.file_name}` file of the destination directory.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "log_dir",
    type=click.Path(path_type=Path),
    metavar=click.style("LOG_DIR", fg="green"),
)
@optgroup.group(f"{click.style('Archive settings', fg='yellow')}")
@optgroup.option(
    "-d",
    "--dest",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Directory to write the archive to. Defaults to 'LOG_DIR/{CFG.archiver.default_dest_dir_name}'.",
)
@optgroup.option(
    "-r",
    "--remove",
    is_flag=True,
    default=False,
    help="Delete each original file after it has been written into the archive.",
)
@optgroup.group(f"{click.style('Output', fg='yellow')}")
@optgroup.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Report every file that is archived or skipped.",
)
def archive(log_dir: Path, dest: Path | None, remove: bool, verbose: bool) -> NoReturn:
    """
    Archive the files of a log directory.
    """
    try:
        result = archive_logs(log_dir, dest, remove, verbose)
        print(f"Archive complete: {result.archive_path}")
        sys.exit(0)
    except LogArcError as e:
        logger.error(e)
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)


def archive_logs(
    log_dir: Path, dest: Path | None, remove: bool, verbose: bool
) -> ArchiveResult:
    """
    Archive the files of `log_dir` and record the run in the history file.

    A failure to record the run is reported as a warning.

    Args:
        log_dir (Path): Directory containing the files to archive.
        dest (Path | None): Destination directory. Defaults to `log_dir/archives`.
        remove (bool): Delete the originals after archiving them.
        verbose (bool): Report every include/skip decision.

    Returns:
        ArchiveResult: The result of the archiving run.

    Raises:
        ArchiveError: If the archive could not be created.
    """
    request = ArchiveRequest.fromPaths(log_dir, dest, remove, verbose)
    if verbose:
        logger.info(f"Source directory: '{request.source_dir}'.")
        logger.info(f"Destination directory: '{request.dest_dir}'.")

    result = Archiver(request).archive()

    if verbose:
        logger.info(f"Archive created: '{result.archive_path}'.")
        logger.info(
            f"Files archived: {result.files_archived}, total bytes: {result.total_bytes}."
        )

    try:
        HistoryRecorder(request.dest_dir).record(result)
    except HistoryError as e:
        logger.warning(e)

    return result
