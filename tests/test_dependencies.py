"""
Tests for build dependency installation via apt.
"""

import pytest

from pyaltinstall.core.data.catalog import BUILD_PACKAGES
from pyaltinstall.core.errors import DependencyError
from pyaltinstall.core.models.command import CommandResult
from pyaltinstall.core.services.dependencies import DependencyInstaller


class TestInstallDependencies:
    def test_update_then_install(self, runner):
        DependencyInstaller(runner).install_dependencies()

        assert runner.commands == [
            ["apt", "update"],
            ["apt", "install", "-y", *BUILD_PACKAGES],
        ]
        assert all(call.needs_sudo for call in runner.call_log)

    def test_custom_package_list(self, runner):
        DependencyInstaller(runner, ["zlib1g-dev"]).install_dependencies()
        assert runner.commands[-1] == ["apt", "install", "-y", "zlib1g-dev"]

    def test_update_failure(self, runner):
        runner.set_failure(["apt", "update"], error="exit 100", stderr="E: network unreachable")

        with pytest.raises(DependencyError) as exc_info:
            DependencyInstaller(runner).install_dependencies()

        assert exc_info.value.step == "apt update"
        assert "network unreachable" in exc_info.value.detail
        # Nothing is installed after a failed index refresh
        assert not runner.ran("apt", "install")

    def test_install_failure(self, runner):
        runner.set_failure(["apt", "install"], error="exit 100", stderr="E: Unable to locate package")

        with pytest.raises(DependencyError) as exc_info:
            DependencyInstaller(runner).install_dependencies()

        assert exc_info.value.step == "apt install"

    def test_idempotent(self, runner):
        installer = DependencyInstaller(runner)
        installer.install_dependencies()
        installer.install_dependencies()
        assert len(runner.calls_matching("apt", "install")) == 2

    def test_stream_flag_passed(self, runner):
        DependencyInstaller(runner, stream=True).install_dependencies()
        assert all(call.stream for call in runner.call_log)


class TestCheckDependencies:
    def test_split_missing_and_installed(self, runner):
        runner.set_failure(["dpkg-query"], error="no packages found matching")
        runner.set_response(
            ["dpkg-query", "-W", "-f=${Status}", "make"],
            CommandResult.success([], stdout="install ok installed"),
        )

        report = DependencyInstaller(runner, ["make", "libssl-dev"]).check_dependencies()
        assert report == {"missing": ["libssl-dev"], "installed": ["make"]}

    def test_deinstalled_package_counts_as_missing(self, runner):
        runner.set_response(["dpkg-query"], CommandResult.success([], stdout="deinstall ok config-files"))
        installer = DependencyInstaller(runner, ["make"])
        assert installer.is_package_installed("make") is False

    def test_check_never_uses_sudo(self, runner):
        DependencyInstaller(runner).check_dependencies()
        assert not any(call.needs_sudo for call in runner.call_log)
