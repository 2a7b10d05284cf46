"""
Tests for command runners — ShellCommandRunner against real commands,
MockRunner scripting.
"""

import subprocess

import pytest

from pyaltinstall.adapters.mock import MockRunner
from pyaltinstall.adapters.shell.command import ShellCommandRunner
from pyaltinstall.core.models.command import CommandResult


class TestShellCommandRunner:
    def test_success_captures_output(self):
        result = ShellCommandRunner().run(["echo", "hello"])
        assert result.ok
        assert result.return_code == 0
        assert result.stdout.strip() == "hello"
        assert result.command == ["echo", "hello"]

    def test_nonzero_exit(self):
        result = ShellCommandRunner().run(["false"])
        assert result.failed
        assert result.return_code == 1
        assert "exit 1" in result.error

    def test_missing_command_does_not_raise(self):
        result = ShellCommandRunner().run(["definitely-not-a-real-tool-xyz"])
        assert result.failed
        assert "Command not found" in result.error
        assert result.return_code is None

    def test_cwd(self, tmp_path):
        result = ShellCommandRunner().run(["pwd"], cwd=str(tmp_path))
        assert result.stdout.strip() == str(tmp_path.resolve())

    def test_env_overrides(self):
        result = ShellCommandRunner().run(
            ["sh", "-c", "echo $PYALT_TEST_VALUE"],
            env_overrides={"PYALT_TEST_VALUE": "42"},
        )
        assert result.stdout.strip() == "42"

    def test_timeout(self):
        result = ShellCommandRunner().run(["sleep", "5"], timeout=1)
        assert result.failed
        assert "timed out" in result.error

    def test_sudo_prefix_for_non_root(self, monkeypatch):
        seen = {}

        def fake_run(cmd, **kwargs):
            seen["cmd"] = cmd
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        monkeypatch.setattr("pyaltinstall.adapters.shell.command.os.geteuid", lambda: 1000)
        monkeypatch.setattr("pyaltinstall.adapters.shell.command.subprocess.run", fake_run)

        result = ShellCommandRunner().run(["ldconfig"], needs_sudo=True)
        assert seen["cmd"] == ["sudo", "ldconfig"]
        # The result reports the command as requested
        assert result.command == ["ldconfig"]

    def test_no_sudo_prefix_for_root(self, monkeypatch):
        seen = {}

        def fake_run(cmd, **kwargs):
            seen["cmd"] = cmd
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        monkeypatch.setattr("pyaltinstall.adapters.shell.command.os.geteuid", lambda: 0)
        monkeypatch.setattr("pyaltinstall.adapters.shell.command.subprocess.run", fake_run)

        ShellCommandRunner().run(["ldconfig"], needs_sudo=True)
        assert seen["cmd"] == ["ldconfig"]

    def test_refresh_sudo_as_root(self, monkeypatch):
        monkeypatch.setattr("pyaltinstall.adapters.shell.command.os.geteuid", lambda: 0)
        result = ShellCommandRunner().refresh_sudo()
        assert result.ok
        assert result.metadata["root"] is True

    def test_is_available(self):
        runner = ShellCommandRunner()
        assert runner.is_available("sh")
        assert not runner.is_available("definitely-not-a-real-tool-xyz")


class TestMockRunner:
    def test_default_success(self):
        runner = MockRunner()
        result = runner.run(["anything"])
        assert result.ok
        assert result.metadata["mock"] is True
        assert runner.call_count == 1

    def test_prefix_matching(self):
        runner = MockRunner()
        runner.set_failure(["make"], error="boom")
        assert runner.run(["make", "-j8"]).failed
        assert runner.run(["./configure"]).ok

    def test_latest_registration_wins(self):
        runner = MockRunner()
        runner.set_failure(["make"])
        runner.set_response(["make", "altinstall"], CommandResult.success([], stdout="done"))

        assert runner.run(["make", "altinstall"]).stdout == "done"
        assert runner.run(["make", "-j2"]).failed

    def test_result_carries_actual_command(self):
        runner = MockRunner()
        runner.set_failure(["apt"])
        assert runner.run(["apt", "update"]).command == ["apt", "update"]

    def test_callable_response(self):
        runner = MockRunner()
        runner.set_response(["echo"], lambda call: CommandResult.success(call.cmd, stdout=call.cmd[1]))
        assert runner.run(["echo", "hi"]).stdout == "hi"

    def test_call_log(self):
        runner = MockRunner()
        runner.run(["ldconfig"], needs_sudo=True, cwd="/tmp")

        call = runner.call_log[0]
        assert call.needs_sudo
        assert call.cwd == "/tmp"
        assert runner.ran("ldconfig")
        assert not runner.ran("make")

    def test_refresh_sudo_goes_through_run(self):
        runner = MockRunner()
        assert runner.refresh_sudo().ok
        assert runner.commands == [["sudo", "-v"]]

    def test_reset(self):
        runner = MockRunner()
        runner.set_failure(["x"])
        runner.run(["x"])
        runner.reset()
        assert runner.call_count == 0
        assert runner.run(["x"]).ok


class TestCommandResult:
    def test_tail_prefers_stderr(self):
        result = CommandResult.failure(["make"], error="x", stdout="out", stderr="a\nb\nc")
        assert result.tail(2) == "b\nc"

    def test_tail_falls_back_to_stdout(self):
        result = CommandResult.failure(["make"], error="x", stdout="only stdout")
        assert result.tail() == "only stdout"

    @pytest.mark.parametrize("status, ok", [("ok", True), ("failed", False)])
    def test_ok_flag(self, status, ok):
        assert CommandResult(status=status).ok is ok

    def test_display(self):
        assert CommandResult.success(["make", "-j4"]).display == "make -j4"
