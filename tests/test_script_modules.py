# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import pytest

from mj_lib.core.error import MissingRequiredArgumentError
from mj_lib.script.modules import force_module_loads, read_module_file


def test_force_module_loads_rewrites_non_forcing_statements():
    text = "reuse Python-3.9\nreuse .samtools-1.9\n"

    assert force_module_loads(text) == ["use Python-3.9", "use .samtools-1.9"]


def test_force_module_loads_keeps_other_lines():
    text = "use Java-1.8\n# comment reuse X\n\nexport FOO=bar\n  reuse indented"

    assert force_module_loads(text) == [
        "use Java-1.8",
        "# comment reuse X",
        "",
        "export FOO=bar",
        "  reuse indented",
    ]


def test_force_module_loads_only_replaces_leading_token():
    assert force_module_loads("reuse reuse-me") == ["use reuse-me"]


def test_force_module_loads_custom_tokens():
    text = "module load gcc\nmodule purge"

    assert force_module_loads(
        text, non_forcing="module load ", forcing="module load --force "
    ) == ["module load --force gcc", "module purge"]


def test_force_module_loads_empty():
    assert force_module_loads("") == []


def test_read_module_file(tmp_path):
    dotkit = tmp_path / "dotkit"
    dotkit.write_text("reuse UGER\nuse R-3.5\n")

    assert read_module_file(dotkit) == ["use UGER", "use R-3.5"]


def test_read_module_file_missing(tmp_path):
    with pytest.raises(MissingRequiredArgumentError, match="environment-module file"):
        read_module_file(tmp_path / "missing")


def test_read_module_file_undecodable(tmp_path):
    modules = tmp_path / "dotkit"
    modules.write_bytes(b"reuse \xff\xfe\n")

    with pytest.raises(MissingRequiredArgumentError):
        read_module_file(modules)
