# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import os
import shutil
import subprocess

import pytest

from mj_lib.batch.manager import Manager
from mj_lib.batch.profile import resolve_profile
from mj_lib.core.error import ScriptWriteError
from mj_lib.properties.invocation import RunInvocation
from mj_lib.records.builder import RecordBuilder
from mj_lib.script.generator import ScriptGenerator

requires_bash = pytest.mark.skipif(shutil.which("bash") is None, reason="needs bash")


def _invocation(tmp_path, manager=Manager.SGE, **kwargs):
    options = {
        "manager": manager,
        "input_list": tmp_path / "inputs.txt",
        "command": "cat",
        "output_dir": tmp_path / "out",
        "script_dir": tmp_path / "scripts",
        "workdir": tmp_path,
    }
    options.update(kwargs)
    return RunInvocation(**options)


def _record(invocation, line="a.txt"):
    builder = RecordBuilder(
        [line],
        invocation.output_dir,
        invocation.extension,
        invocation.dest_is_dir,
        invocation.script_dir,
        invocation.logs,
        invocation.job_prefix,
    )
    return next(iter(builder))


def _generator(invocation, module_lines=None):
    return ScriptGenerator(resolve_profile(invocation.manager), invocation, module_lines)


def test_render_sge_script(tmp_path):
    invocation = _invocation(tmp_path)
    record = _record(invocation)

    script = _generator(invocation).render(record)
    lines = script.splitlines()

    assert lines[0] == "#!/bin/bash"
    assert lines[1] == "#$ -N a"
    assert lines[2] == "#$ -V"
    assert lines[3] == f"#$ -o {tmp_path}/scripts/logs/a.out"
    assert lines[4] == f"#$ -e {tmp_path}/scripts/logs/a.err"
    assert "ulimit -c 0" in lines
    assert "set -euo pipefail" in lines
    assert f"cd {tmp_path}" in lines
    assert f"cat a.txt {tmp_path}/out/a.out || status=$?" in lines
    assert f'echo "$status" > {tmp_path}/out/a.out.done' in lines
    assert lines[-1] == 'exit "$status"'
    assert "${JOB_ID:-local}" in script
    assert "${JOB_NAME:-a}" in script


def test_render_orders_sections(tmp_path):
    invocation = _invocation(tmp_path)
    record = _record(invocation)

    script = _generator(invocation, ["use Python-3.9"]).render(record)

    positions = [
        script.index("#!/bin/bash"),
        script.index("#$ -N a"),
        script.index("ulimit -c 0"),
        script.index("use Python-3.9"),
        script.index("set -euo pipefail"),
        script.index("if [ -f"),
        script.index(f"cd {tmp_path}"),
        script.index("cat a.txt"),
        script.index('echo "$status" >'),
    ]
    assert positions == sorted(positions)


@pytest.mark.parametrize(
    "manager,name_line,env_line",
    [
        (Manager.PBS, "#PBS -N a", "#PBS -V"),
        (Manager.LSF, "#BSUB -J a", "#BSUB -env all"),
        (Manager.SLURM, "#SBATCH --job-name a", "#SBATCH --export=ALL"),
    ],
)
def test_render_directives_per_manager(tmp_path, manager, name_line, env_line):
    invocation = _invocation(tmp_path, manager=manager)
    script = _generator(invocation).render(_record(invocation))

    assert name_line in script.splitlines()
    assert env_line in script.splitlines()


def test_render_slurm_log_directives(tmp_path):
    invocation = _invocation(tmp_path, manager=Manager.SLURM)
    lines = _generator(invocation).render(_record(invocation)).splitlines()

    assert f"#SBATCH --output {tmp_path}/scripts/logs/a.out" in lines
    assert f"#SBATCH --error {tmp_path}/scripts/logs/a.err" in lines


def test_render_lsf_has_no_log_directives(tmp_path):
    invocation = _invocation(tmp_path, manager=Manager.LSF)
    lines = _generator(invocation).render(_record(invocation)).splitlines()
    directives = [line.split()[:2] for line in lines if line.startswith("#BSUB")]

    assert ["#BSUB", "-o"] not in directives
    assert ["#BSUB", "-e"] not in directives
    assert ["#BSUB", "-env"] in directives


def test_render_never_contains_array_directive(tmp_path):
    invocation = _invocation(tmp_path, array=True)
    script = _generator(invocation).render(_record(invocation))

    assert "#$ -t" not in script


def test_render_without_env_export(tmp_path):
    invocation = _invocation(tmp_path, export_env=False)
    script = _generator(invocation).render(_record(invocation))

    assert "#$ -V" not in script


def test_render_extra_submit_options(tmp_path):
    invocation = _invocation(tmp_path, submit_options=("-q long", "-l h_vmem=4G"))
    lines = _generator(invocation).render(_record(invocation)).splitlines()

    assert "#$ -q long" in lines
    assert "#$ -l h_vmem=4G" in lines


def test_render_module_lines(tmp_path):
    invocation = _invocation(tmp_path)
    script = _generator(invocation, ["use UGER", "use R-3.5"]).render(
        _record(invocation)
    )

    assert "use UGER\nuse R-3.5" in script


def test_header_lines_with_array(tmp_path):
    invocation = _invocation(tmp_path, manager=Manager.SLURM)
    lines = _generator(invocation).headerLines(
        "arr", tmp_path / "o", tmp_path / "e", array_size=7
    )

    assert "#SBATCH --array 1-7" in lines


def test_payload_appends_paths(tmp_path):
    invocation = _invocation(tmp_path, command="gzip -c")
    record = _record(invocation)

    assert _generator(invocation).payload(record) == f"gzip -c a.txt {tmp_path}/out/a.out"


def test_payload_placeholders(tmp_path):
    invocation = _invocation(tmp_path, command="sort {input} > {output}")
    record = _record(invocation)

    assert (
        _generator(invocation).payload(record)
        == f"sort a.txt > {tmp_path}/out/a.out"
    )


def test_payload_prefix(tmp_path):
    invocation = _invocation(tmp_path, command="wc -l", prefix="time")
    record = _record(invocation)

    assert _generator(invocation).payload(record).startswith("time wc -l a.txt")


def test_payload_quotes_paths(tmp_path):
    invocation = _invocation(tmp_path)
    record = _record(invocation, "my file.txt")

    assert "'my file.txt'" in _generator(invocation).payload(record)


def test_payload_keeps_shell_braces(tmp_path):
    invocation = _invocation(tmp_path, command='tool --threads "${NSLOTS:-1}" {input}')
    record = _record(invocation)

    assert (
        _generator(invocation).payload(record)
        == 'tool --threads "${NSLOTS:-1}" a.txt'
    )


def test_absolute_anchors_relative_paths(tmp_path):
    from pathlib import Path

    generator = _generator(_invocation(tmp_path))

    assert generator.absolute(Path("out/a.out")) == tmp_path / "out" / "a.out"
    assert generator.absolute(Path("/abs/x")) == Path("/abs/x")


def test_write_creates_executable_script(tmp_path):
    invocation = _invocation(tmp_path)
    invocation.script_dir.mkdir()
    record = _record(invocation)

    path = _generator(invocation).write(record)

    assert path == record.script_path
    assert path.read_text().startswith("#!/bin/bash\n")
    assert os.access(path, os.X_OK)


def test_write_overwrites_previous_script(tmp_path):
    invocation = _invocation(tmp_path)
    invocation.script_dir.mkdir()
    record = _record(invocation)
    record.script_path.write_text("stale")

    _generator(invocation).write(record)

    assert "stale" not in record.script_path.read_text()


def test_write_raises_when_directory_missing(tmp_path):
    invocation = _invocation(tmp_path)

    with pytest.raises(ScriptWriteError):
        _generator(invocation).write(_record(invocation))


def _run_script(tmp_path, command):
    invocation = _invocation(tmp_path, command=command)
    invocation.script_dir.mkdir()
    invocation.output_dir.mkdir()
    (tmp_path / "a.txt").write_text("payload input\n")
    record = _record(invocation)
    script = _generator(invocation).write(record)

    result = subprocess.run(
        ["bash", str(script)], cwd="/", capture_output=True, text=True, check=False
    )
    return record, result


@requires_bash
def test_generated_script_records_success(tmp_path):
    record, result = _run_script(tmp_path, "cp {input} {output}")

    assert result.returncode == 0
    assert record.marker_path.read_text() == "0\n"
    assert (tmp_path / "out" / "a.out").read_text() == "payload input\n"


@requires_bash
def test_generated_script_records_failure(tmp_path):
    record, result = _run_script(tmp_path, "sh -c 'exit 3' --")

    assert result.returncode == 3
    assert record.marker_path.read_text() == "3\n"


@requires_bash
def test_generated_script_skips_completed_record(tmp_path):
    invocation = _invocation(tmp_path, command="touch {output}")
    invocation.script_dir.mkdir()
    invocation.output_dir.mkdir()
    record = _record(invocation)
    record.marker_path.write_text("0\n")
    script = _generator(invocation).write(record)

    result = subprocess.run(
        ["bash", str(script)], cwd="/", capture_output=True, text=True, check=False
    )

    assert result.returncode == 0
    assert "already completed" in result.stdout
    assert not record.output_path.exists()
