# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text
from tabulate import tabulate

from logarc_lib.core.common import format_bytes, get_panel_width
from logarc_lib.core.config import CFG

from .entry import HistoryEntry


class HistoryPresenter:
    """
    Present the records of the archive history file.
    """

    _HEADERS = ["#", "Time", "Archive", "Files", "Size"]

    def __init__(self, entries: list[HistoryEntry]):
        """
        Initialize the presenter with history entries, oldest first.

        Args:
            entries (list[HistoryEntry]): Entries to present.
        """
        self._entries = entries

    def createHistoryPanel(self, console: Console | None = None) -> Group:
        """
        Create a Rich panel displaying the history entries and their totals.

        Args:
            console (Console | None): Optional Rich Console instance.
                If None, a new Console will be created.

        Returns:
            Group: Rich Group containing the history panel.
        """
        console = console or Console()
        settings = CFG.history_presenter

        content = Group(
            Text(self._createTable(), style=settings.main_style),
            Text(""),
            Text(self._createSummary(), style=settings.secondary_style),
        )

        panel = Panel(
            content,
            title=Text("ARCHIVE HISTORY", style=settings.title_style, justify="center"),
            border_style=settings.border_style,
            padding=(1, 1),
            width=get_panel_width(console, 1, settings.min_width, settings.max_width),
            expand=False,
        )

        return Group(Text(""), panel, Text(""))

    def _createTable(self) -> str:
        """
        Build a tabulated string representation of the history entries.
        """
        rows = [
            [i, e.timestamp, e.archive, e.files, format_bytes(e.total_bytes)]
            for i, e in enumerate(self._entries, start=1)
        ]
        return tabulate(
            rows,
            headers=HistoryPresenter._HEADERS,
            tablefmt="simple",
            colalign=("right", "left", "left", "right", "right"),
        )

    def _createSummary(self) -> str:
        """
        Summarize the number of archives, files, and bytes in the history.
        """
        n_archives = len(self._entries)
        n_files = sum(e.files for e in self._entries)
        n_bytes = sum(e.total_bytes for e in self._entries)
        return (
            f"{n_archives} archive{'s' if n_archives != 1 else ''}, "
            f"{n_files} file{'s' if n_files != 1 else ''}, "
            f"{format_bytes(n_bytes)} in total"
        )
