# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import click

from logarc_lib.core.click_format import GNUHelpColorsCommand, GNUHelpFormatter


def test_write_usage_default_prefix():
    formatter = GNUHelpFormatter()
    formatter.write_usage("logarc archive", "[OPTIONS] LOG_DIR")

    assert click.unstyle(formatter.getvalue()) == "Usage: logarc archive [OPTIONS] LOG_DIR\n"


def test_write_usage_without_args():
    formatter = GNUHelpFormatter()
    formatter.write_usage("logarc", prefix="Run:")

    assert click.unstyle(formatter.getvalue()) == "Run: logarc\n"


def test_write_dl_puts_descriptions_below_terms():
    formatter = GNUHelpFormatter()
    formatter.write_dl([("-v, --verbose", "Report every file."), ("--flag", "")])

    assert click.unstyle(formatter.getvalue()) == (
        "  -v, --verbose\n      Report every file.\n\n  --flag\n\n"
    )


def test_gnu_help_colors_command_help():
    @click.command(cls=GNUHelpColorsCommand, help_options_color="bright_blue")
    @click.option("--dest", help="Destination directory.")
    def command(dest):
        pass

    with click.Context(command, info_name="command") as ctx:
        help_text = click.unstyle(command.get_help(ctx))

    assert help_text.startswith("Usage: command [OPTIONS]")
    assert "  --dest TEXT\n      Destination directory.\n" in help_text
