# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import os
from unittest.mock import MagicMock

import pytest

from mj_lib.core.common import (
    get_panel_width,
    path_stem,
    strip_comment,
    write_executable,
)
from mj_lib.core.error import ScriptWriteError


@pytest.mark.parametrize(
    "line,expected",
    [
        ("a.txt", "a.txt"),
        ("  a.txt  ", "a.txt"),
        ("a.txt # trailing comment", "a.txt"),
        ("# only a comment", ""),
        ("", ""),
        ("   ", ""),
        ("dir/b.fastq#no space", "dir/b.fastq"),
    ],
)
def test_strip_comment(line, expected):
    assert strip_comment(line) == expected


@pytest.mark.parametrize(
    "path,expected",
    [
        ("a.txt", "a"),
        ("data/sample.fastq", "sample"),
        ("/abs/archive.tar.gz", "archive.tar"),
        ("noext", "noext"),
    ],
)
def test_path_stem(path, expected):
    assert path_stem(path) == expected


def test_write_executable_creates_executable_file(tmp_path):
    script = tmp_path / "job.sh"
    write_executable(script, "#!/bin/bash\necho hi\n")

    assert script.read_text() == "#!/bin/bash\necho hi\n"
    assert os.access(script, os.X_OK)


def test_write_executable_overwrites_existing_file(tmp_path):
    script = tmp_path / "job.sh"
    script.write_text("old")

    write_executable(script, "new")

    assert script.read_text() == "new"


def test_write_executable_raises_script_write_error(tmp_path):
    script = tmp_path / "missing_dir" / "job.sh"

    with pytest.raises(ScriptWriteError, match="Could not write script"):
        write_executable(script, "content")


@pytest.mark.parametrize(
    "width,factor,min_width,max_width,expected",
    [
        (120, 1, None, None, 120),
        (120, 2, None, None, 60),
        (40, 1, 60, None, 60),
        (200, 1, 60, 100, 100),
    ],
)
def test_get_panel_width(width, factor, min_width, max_width, expected):
    console = MagicMock()
    console.size.width = width

    assert get_panel_width(console, factor, min_width, max_width) == expected
