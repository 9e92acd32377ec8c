# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from mj_lib.batch.manager import Manager
from mj_lib.core.config import CFG
from mj_lib.core.error import MJError
from mj_lib.make import make
from mj_lib.make.cli import _absolute, _split_options


@pytest.fixture
def input_list(tmp_path):
    path = tmp_path / "inputs.txt"
    path.write_text("a.txt\nb.txt\n")
    return path


def _invoke(args, report_failed=False, env=None):
    runner = CliRunner()

    with (
        patch("mj_lib.make.cli.JobMaker") as mock_maker_cls,
        patch("mj_lib.make.cli.MakePresenter") as mock_presenter_cls,
        patch("mj_lib.make.cli.Console"),
    ):
        mock_maker = MagicMock()
        mock_maker.make.return_value = MagicMock(failed=report_failed)
        mock_maker_cls.return_value = mock_maker

        result = runner.invoke(make, args, env=env)

    return result, mock_maker_cls, mock_presenter_cls


def test_make_command_builds_invocation(tmp_path, input_list):
    result, mock_maker_cls, mock_presenter_cls = _invoke(
        [
            str(input_list),
            "gzip -c {input} > {output}",
            "-m",
            "pbs",
            "--workdir",
            str(tmp_path),
            "--submit-options",
            "-q long; -l walltime=1:00:00;",
            "--ext",
            "gz",
        ]
    )

    assert result.exit_code == 0
    invocation = mock_maker_cls.call_args.args[0]
    assert invocation.manager == Manager.PBS
    assert invocation.input_list == input_list.resolve()
    assert invocation.command == "gzip -c {input} > {output}"
    assert invocation.workdir == tmp_path.resolve()
    assert invocation.output_dir == (tmp_path / "out").resolve()
    assert invocation.script_dir == (tmp_path / "scripts").resolve()
    assert invocation.log_dir is None
    assert invocation.extension == "gz"
    assert invocation.submit_options == ("-q long", "-l walltime=1:00:00")
    assert invocation.export_env is True
    assert invocation.array is False
    assert invocation.argv[0] == CFG.binary_name
    mock_presenter_cls.assert_called_once()
    mock_presenter_cls.return_value.createPanel.assert_called_once()


def test_make_command_passes_modes(tmp_path, input_list):
    result, mock_maker_cls, _ = _invoke(
        [
            str(input_list),
            "cat",
            "-m",
            "sge",
            "--workdir",
            str(tmp_path),
            "--array",
            "--array-name",
            "batch",
            "--dry-run",
            "--no-export-env",
            "--dest-dir",
            "--log-dir",
            "logs",
        ]
    )

    assert result.exit_code == 0
    invocation = mock_maker_cls.call_args.args[0]
    assert invocation.array is True
    assert invocation.array_name == "batch"
    assert invocation.dry_run is True
    assert invocation.export_env is False
    assert invocation.dest_is_dir is True
    assert invocation.log_dir == (tmp_path / "logs").resolve()


def test_make_command_reads_manager_from_environment(tmp_path, input_list):
    result, mock_maker_cls, _ = _invoke(
        [str(input_list), "cat", "--workdir", str(tmp_path)],
        env={CFG.env_vars.manager: "slurm"},
    )

    assert result.exit_code == 0
    assert mock_maker_cls.call_args.args[0].manager == Manager.SLURM


def test_make_command_fails_without_manager(tmp_path, input_list, monkeypatch):
    monkeypatch.delenv(CFG.env_vars.manager, raising=False)

    result, mock_maker_cls, _ = _invoke([str(input_list), "cat"])

    assert result.exit_code == CFG.exit_codes.default
    mock_maker_cls.assert_not_called()


def test_make_command_fails_with_unknown_manager(input_list):
    result, mock_maker_cls, _ = _invoke([str(input_list), "cat", "-m", "condor"])

    assert result.exit_code == CFG.exit_codes.default
    mock_maker_cls.assert_not_called()


def test_make_command_fails_with_missing_input_list(tmp_path):
    result, mock_maker_cls, _ = _invoke(
        [str(tmp_path / "missing.txt"), "cat", "-m", "sge"]
    )

    assert result.exit_code == CFG.exit_codes.default
    mock_maker_cls.assert_not_called()


def test_make_command_exits_with_error_when_report_failed(input_list):
    result, _, mock_presenter_cls = _invoke(
        [str(input_list), "cat", "-m", "sge"], report_failed=True
    )

    assert result.exit_code == CFG.exit_codes.default
    mock_presenter_cls.assert_called_once()


def test_make_command_mj_error_uses_its_exit_code(input_list):
    runner = CliRunner()
    error = MJError("cannot create directory")
    error.exit_code = 42

    with (
        patch("mj_lib.make.cli.JobMaker", side_effect=error),
        patch("mj_lib.make.cli.logger") as mock_logger,
    ):
        result = runner.invoke(make, [str(input_list), "cat", "-m", "sge"])

    assert result.exit_code == 42
    mock_logger.error.assert_called_once_with(error)


def test_make_command_unexpected_error(input_list):
    runner = CliRunner()

    with (
        patch("mj_lib.make.cli.JobMaker", side_effect=RuntimeError("boom")),
        patch("mj_lib.make.cli.logger") as mock_logger,
    ):
        result = runner.invoke(make, [str(input_list), "cat", "-m", "sge"])

    assert result.exit_code == CFG.exit_codes.unexpected_error
    mock_logger.critical.assert_called_once()


def test_absolute_resolves_relative_paths():
    assert _absolute("out", Path("/work")) == Path("/work/out")
    assert _absolute("/data/out", Path("/work")) == Path("/data/out")


@pytest.mark.parametrize(
    "options, expected",
    [
        (None, ()),
        ("", ()),
        ("-q long", ("-q long",)),
        ("-q long;;-l h_vmem=4G ", ("-q long", "-l h_vmem=4G")),
    ],
)
def test_split_options(options, expected):
    assert _split_options(options) == expected
