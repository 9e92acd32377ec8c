# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for mj.

This module defines dataclasses representing all configurable aspects of mj,
including file suffixes, environment variables, directory layout, the
environment-module rewrite rule, presentation settings, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class FileSuffixes:
    """File suffixes used by mj."""

    # Suffix for generated per-record job scripts.
    script: str = ".sh"
    # Suffix for the generated task array script.
    array_script: str = ".array.sh"
    # Suffix for captured stdout.
    stdout: str = ".out"
    # Suffix for captured stderr.
    stderr: str = ".err"
    # Suffix (without the dot) of completion marker files.
    marker: str = "done"


@dataclass
class EnvironmentVariables:
    """Environment variable names used by mj."""

    # Enables mj debug mode.
    debug_mode: str = "MJ_DEBUG"
    # Name of the resource manager used when none is given on the command line.
    manager: str = "MJ_MANAGER"


@dataclass
class DirectorySettings:
    """Layout of the directories created by mj."""

    # Subdirectory of the script directory holding task array links.
    tasks: str = "tasks"
    # Subdirectory of the script directory holding job logs.
    logs: str = "logs"
    # Name of the file (inside the script directory) recording invocations.
    history_file: str = "mj_history.yaml"


@dataclass
class ModuleSettings:
    """Rewrite rule applied to environment-module (dotkit) files."""

    # Leading token of a load statement that does not force reloading.
    non_forcing: str = "reuse "
    # Leading token that forces the package to be loaded.
    forcing: str = "use "


@dataclass
class ScriptSettings:
    """Settings for generated job scripts."""

    # Interpreter declaration written on the first line of every script.
    interpreter: str = "#!/bin/bash"
    # Shell used to launch per-record scripts from the task array script.
    shell: str = "bash"
    # Default name of the task array job.
    array_name: str = "mj"


@dataclass
class MakePresenterSettings:
    """Settings for MakePresenter."""

    # Maximal width of the panel.
    max_width: int | None = None
    # Minimal width of the panel.
    min_width: int | None = 60
    # Style used for border lines.
    border_style: str = "white"
    # Style used for the title.
    title_style: str = "white bold"
    # Style used for table headers.
    headers_style: str = "default"
    # Style used for table values.
    main_style: str = "white"
    # Style used for the summary line.
    secondary_style: str = "grey70"


@dataclass
class OutcomeColors:
    """Color scheme for record outcomes."""

    skipped: str = "grey70"
    generated: str = "bright_blue"
    submitted: str = "bright_green"
    failed: str = "bright_red"
    rejected: str = "bright_yellow"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by mj.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of mj commands.
    default: int = 91
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for mj."""

    suffixes: FileSuffixes = field(default_factory=FileSuffixes)
    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    dirs: DirectorySettings = field(default_factory=DirectorySettings)
    modules: ModuleSettings = field(default_factory=ModuleSettings)
    script: ScriptSettings = field(default_factory=ScriptSettings)
    make_presenter: MakePresenterSettings = field(
        default_factory=MakePresenterSettings
    )
    outcome_colors: OutcomeColors = field(default_factory=OutcomeColors)
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the mj binary.
    binary_name: str = "mj"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read mj config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path) if (env_path := os.getenv("MJ_CONFIG")) else None,
            # 2. Current working directory
            Path.cwd() / "mj_config.toml",
            # 3. XDG config home
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "mj"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Handles nested dataclasses properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for mj.
CFG = Config.load()
