# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import asdict

import yaml
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mj_lib.batch.profile import SchedulerProfile
from mj_lib.core.common import get_panel_width, load_yaml_dumper
from mj_lib.core.config import CFG


class ProfilesPresenter:
    """
    Presents the syntax profiles of resource managers.
    """

    def __init__(self, profiles: list[SchedulerProfile]):
        self._profiles = profiles

    def dumpYaml(self) -> None:
        """
        Print the YAML representation of all profiles to stdout.
        """
        data = {}
        for profile in self._profiles:
            fields = asdict(profile)
            fields.pop("manager")
            data[str(profile.manager)] = fields

        print(
            yaml.dump(
                data, Dumper=load_yaml_dumper(), default_flow_style=False, sort_keys=False
            ),
            end="",
        )

    def createProfilesPanel(self, console: Console | None = None) -> Group:
        """
        Create a Rich panel with one column per resource manager.
        """
        console = console or Console()
        settings = CFG.make_presenter

        table = Table(box=None, padding=(0, 2), header_style=settings.headers_style)
        table.add_column("")
        for profile in self._profiles:
            table.add_column(str(profile.manager))

        rows = [
            ("directive", lambda p: p.directive),
            ("job name", lambda p: p.name_flag),
            ("task array", lambda p: p.array_flag or "-"),
            ("environment", lambda p: p.env_flag),
            ("stdout", lambda p: p.stdout_flag),
            ("stderr", lambda p: p.stderr_flag),
            ("job id", lambda p: p.reference(p.job_id_token)),
            ("job name var", lambda p: p.reference(p.job_name_token)),
            ("task index", lambda p: p.reference(p.task_index_token)),
            ("submit", lambda p: p.submit_command),
        ]
        for label, getter in rows:
            table.add_row(
                Text(label, style="bold"),
                *(Text(getter(p), style=settings.main_style) for p in self._profiles),
            )

        panel = Panel(
            table,
            title=Text("RESOURCE MANAGERS", style=settings.title_style, justify="center"),
            border_style=settings.border_style,
            padding=(1, 1),
            width=get_panel_width(console, 1, settings.min_width, settings.max_width),
            expand=False,
        )

        return Group(Text(""), panel, Text(""))
