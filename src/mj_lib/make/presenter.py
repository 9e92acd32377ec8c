# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mj_lib.core.common import get_panel_width
from mj_lib.core.config import CFG

from .maker import MakeReport, Outcome


class MakePresenter:
    """
    Presents the outcome of an mj invocation.
    """

    def __init__(self, report: MakeReport, dry_run: bool):
        """
        Initialize the presenter.

        Args:
            report (MakeReport): Report returned by JobMaker.
            dry_run (bool): Whether the invocation was a dry run.
        """
        self._report = report
        self._dry_run = dry_run

    def createPanel(self, console: Console | None = None) -> Group:
        """
        Create a Rich panel summarizing the processed records.

        Args:
            console (Console | None): Optional Rich Console instance.
                If None, a new Console will be created.

        Returns:
            Group: Rich Group containing the records table and a summary.
        """
        console = console or Console()
        settings = CFG.make_presenter

        panel = Panel(
            Group(self._createRecordsTable(), Text(""), self._createSummary()),
            title=Text(
                "DRY RUN" if self._dry_run else "JOBS",
                style=settings.title_style,
                justify="center",
            ),
            border_style=settings.border_style,
            padding=(1, 1),
            width=get_panel_width(console, 1, settings.min_width, settings.max_width),
            expand=False,
        )

        return Group(Text(""), panel, Text(""))

    def _createRecordsTable(self) -> Table:
        settings = CFG.make_presenter
        table = Table(box=None, padding=(0, 1), header_style=settings.headers_style)
        table.add_column("#", justify="right")
        table.add_column("Input")
        table.add_column("Outcome")
        table.add_column("Script")

        for result in self._report.results:
            table.add_row(
                Text(str(result.record.index), style=settings.main_style),
                Text(result.record.input_path, style=settings.main_style),
                Text(str(result.outcome), style=self._outcomeStyle(result.outcome)),
                Text(str(result.record.script_path), style=settings.secondary_style),
            )

        return table

    def _createSummary(self) -> Text:
        summary = Text()
        for outcome in Outcome:
            if count := self._report.count(outcome):
                summary.append(f"{outcome}: ", style=CFG.make_presenter.secondary_style)
                summary.append(f"{count}  ", style=self._outcomeStyle(outcome))

        if self._report.array_script:
            state = "submitted" if self._report.array_submitted else "written"
            summary.append(
                f"\ntask array ({self._report.array_size} tasks) {state}: {self._report.array_script}",
                style=CFG.make_presenter.secondary_style,
            )

        if self._report.array_error:
            summary.append(
                f"\ntask array failed: {self._report.array_error}",
                style=CFG.outcome_colors.failed,
            )

        return summary

    @staticmethod
    def _outcomeStyle(outcome: Outcome) -> str:
        return getattr(CFG.outcome_colors, outcome.name.lower())
