# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
import sys
from pathlib import Path
from typing import NoReturn

import click
from click_option_group import optgroup
from rich.console import Console

from mj_lib.batch.manager import Manager
from mj_lib.core.click_format import GNUHelpColorsCommand
from mj_lib.core.config import CFG
from mj_lib.core.error import MissingRequiredArgumentError, MJError
from mj_lib.core.logger import get_logger
from mj_lib.properties.invocation import RunInvocation

from .maker import JobMaker
from .presenter import MakePresenter

logger = get_logger(__name__)


@click.command(
    short_help="Generate and submit one job per input file.",
    help=f"""
Generate one job script per input file and submit it to a batch resource manager.

{click.style("INPUT_LIST", fg="green")}   File listing one input path per line. Text after '#' is ignored.
{click.style("COMMAND", fg="green")}      Command to run for every input. Use '{{input}}' and '{{output}}'
             to place the paths, otherwise both are appended to the command.

Jobs whose completion marker reports a successful run are skipped,
so running the same command again only resubmits unfinished work.
""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument("input_list", type=str, metavar=click.style("INPUT_LIST", fg="green"))
@click.argument("command", type=str, metavar=click.style("COMMAND", fg="green"))
@optgroup.group(f"{click.style('Resource manager', fg='yellow')}")
@optgroup.option(
    "--manager",
    "-m",
    type=str,
    default=None,
    help=f"Resource manager to generate scripts for: {', '.join(str(m) for m in Manager)}. Defaults to the environment variable '{CFG.env_vars.manager}'.",
)
@optgroup.option(
    "--submit-command",
    type=str,
    default=None,
    help="Command used to submit the scripts. Defaults to the standard command of the resource manager.",
)
@optgroup.option(
    "--submit-options",
    type=str,
    default=None,
    help="Semicolon-separated list of extra options embedded into every script as directives (e.g., '-q long;-l h_vmem=4G').",
)
@optgroup.option(
    "--prefix",
    type=str,
    default=None,
    help="Command prepended to the payload command (e.g., 'time').",
)
@optgroup.option(
    "--job-prefix",
    type=str,
    default="",
    help="Prefix of all job names.",
)
@optgroup.group(f"{click.style('Paths', fg='yellow')}")
@optgroup.option(
    "--output-dir",
    "-o",
    type=str,
    default="out",
    show_default=True,
    help="Directory receiving the outputs.",
)
@optgroup.option(
    "--ext",
    type=str,
    default="out",
    show_default=True,
    help="Extension of the output files. Ignored with `--dest-dir`.",
)
@optgroup.option(
    "--dest-dir",
    is_flag=True,
    help="Give every job its own output directory instead of an output file.",
)
@optgroup.option(
    "--script-dir",
    "-s",
    type=str,
    default="scripts",
    show_default=True,
    help="Directory receiving the generated scripts.",
)
@optgroup.option(
    "--log-dir",
    type=str,
    default=None,
    help=f"Directory receiving the job logs. Defaults to '<script-dir>/{CFG.dirs.logs}'.",
)
@optgroup.option(
    "--workdir",
    type=str,
    default=None,
    help="Directory the jobs run in. Defaults to the current directory.",
)
@optgroup.group(f"{click.style('Modes', fg='yellow')}")
@optgroup.option(
    "--array",
    is_flag=True,
    help="Submit all jobs as a single task array.",
)
@optgroup.option(
    "--array-name",
    type=str,
    default=CFG.script.array_name,
    show_default=True,
    help="Name of the task array job.",
)
@optgroup.option(
    "--dry-run",
    "-n",
    is_flag=True,
    help="Generate the scripts but do not submit anything.",
)
@optgroup.option(
    "--no-export-env",
    is_flag=True,
    help="Do not export the current environment to the jobs.",
)
@optgroup.option(
    "--modules",
    type=str,
    default=None,
    help="Environment-module (dotkit) file whose statements are embedded into every script.",
)
def make(
    input_list: str,
    command: str,
    manager: str | None,
    submit_command: str | None,
    submit_options: str | None,
    prefix: str | None,
    job_prefix: str,
    output_dir: str,
    ext: str,
    dest_dir: bool,
    script_dir: str,
    log_dir: str | None,
    workdir: str | None,
    array: bool,
    array_name: str,
    dry_run: bool,
    no_export_env: bool,
    modules: str | None,
) -> NoReturn:
    """
    Generate and submit one job per input file.
    """
    try:
        if not (manager := manager or os.environ.get(CFG.env_vars.manager)):
            raise MissingRequiredArgumentError(
                f"No resource manager specified. Use '--manager' or set '{CFG.env_vars.manager}'."
            )

        if not (input_path := Path(input_list)).is_file():
            raise MissingRequiredArgumentError(
                f"Input list '{input_list}' does not exist or is not a file."
            )

        cwd = Path(workdir).resolve() if workdir else Path.cwd()
        invocation = RunInvocation(
            manager=Manager.fromStr(manager),
            input_list=input_path.resolve(),
            command=command,
            output_dir=_absolute(output_dir, cwd),
            extension=ext,
            dest_is_dir=dest_dir,
            script_dir=_absolute(script_dir, cwd),
            log_dir=_absolute(log_dir, cwd) if log_dir else None,
            workdir=cwd,
            array=array,
            array_name=array_name,
            dry_run=dry_run,
            submit_command=submit_command,
            submit_options=_split_options(submit_options),
            prefix=prefix,
            export_env=not no_export_env,
            modules_file=Path(modules).resolve() if modules else None,
            job_prefix=job_prefix,
            argv=(CFG.binary_name, *sys.argv[1:]),
        )

        report = JobMaker(invocation).make()

        console = Console(record=False, markup=False)
        console.print(MakePresenter(report, dry_run).createPanel(console))
        sys.exit(CFG.exit_codes.default if report.failed else 0)
    except MJError as e:
        logger.error(e)
        print()
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        print()
        sys.exit(CFG.exit_codes.unexpected_error)


def _absolute(path: str, cwd: Path) -> Path:
    """Resolve `path` against `cwd` unless it is already absolute."""
    return (cwd / path).resolve()


def _split_options(options: str | None) -> tuple[str, ...]:
    """Split a semicolon-separated list of scheduler options."""
    if not options:
        return ()

    return tuple(o.strip() for o in options.split(";") if o.strip())
