"""Tests for process preparation."""

import subprocess
import sys

import pytest

from subexec.models import InvocationRequest
from subexec.process_utils import prepare
from subexec.quoting import quote

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX argv handling")


@posix_only
def test_prepare_splits_argument_string():
    prepared = prepare(InvocationRequest(executable_path="tool", args='a "b c" d"""e'))
    assert prepared.argv == ["tool", "a", "b c", 'd"e']
    assert prepared.command_line is None


def test_prepare_without_args():
    prepared = prepare(InvocationRequest(executable_path="tool"))
    assert prepared.argv == ["tool"]


def test_prepare_keeps_cwd_and_replaces_env(tmp_path):
    request = InvocationRequest(
        executable_path="tool", cwd=tmp_path, env={"ONLY": "this"}
    )
    prepared = prepare(request)
    assert prepared.cwd == str(tmp_path)
    assert prepared.env == {"ONLY": "this"}


def test_prepare_inherits_environment_by_default():
    prepared = prepare(InvocationRequest(executable_path="tool"))
    assert prepared.env is None
    assert prepared.cwd is None


def test_prepare_redirects_all_streams_without_shell():
    kwargs = prepare(InvocationRequest(executable_path="tool")).popen_kwargs()
    assert kwargs["stdin"] == subprocess.PIPE
    assert kwargs["stdout"] == subprocess.PIPE
    assert kwargs["stderr"] == subprocess.PIPE
    assert kwargs["shell"] is False
    assert "text" not in kwargs
    assert "encoding" not in kwargs


def test_started_pipes_do_not_translate_newlines():
    prepared = prepare(
        InvocationRequest(
            executable_path=sys.executable,
            args=quote(["-c", "import sys; sys.stdout.buffer.write(b\"a\\r\\nb\\rc\\n\")"]),
        ),
        encoding="latin-1",
    )
    with prepared.start() as process:
        process.stdin.close()
        assert process.stdout.encoding == "latin-1"
        output = process.stdout.read()
        process.stderr.read()
    assert output == "a\r\nb\rc\n"


def test_prepare_rejects_blank_executable():
    with pytest.raises(ValueError, match="Executable path"):
        prepare(InvocationRequest(executable_path="   "))


@pytest.mark.skipif(sys.platform != "win32", reason="Windows command line")
def test_prepare_passes_command_line_verbatim_on_windows():
    prepared = prepare(InvocationRequest(executable_path="C:\\my tools\\t.exe", args='x """'))
    assert prepared.command_line == '"C:\\my tools\\t.exe" x """'
    assert prepared.creationflags == subprocess.CREATE_NO_WINDOW


def test_start_reports_missing_executable(tmp_path):
    prepared = prepare(InvocationRequest(executable_path=str(tmp_path / "missing")))
    with pytest.raises(OSError):
        prepared.start()
