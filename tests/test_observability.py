"""
Tests for logging setup — verbosity resolution and handlers.
"""

import logging

import pytest

from pyaltinstall.core.observability.logging_config import (
    FILE_ENV_VAR,
    FILE_LEVEL_ENV_VAR,
    LEVEL_ENV_VAR,
    Verbosity,
    configure_logging,
    parse_level,
    resolve_verbosity,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    def test_names(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level(" Error ") == logging.ERROR

    def test_unknown_or_empty(self):
        assert parse_level("LOUD") == logging.WARNING
        assert parse_level(None, default=logging.DEBUG) == logging.DEBUG


class TestResolveVerbosity:
    def test_default(self):
        assert resolve_verbosity(env={}) == Verbosity(logging.WARNING, stream_output=False)

    def test_flag_precedence(self):
        assert resolve_verbosity(debug=True, verbose=True, quiet=True, env={}).level == logging.DEBUG
        assert resolve_verbosity(verbose=True, quiet=True, env={}).level == logging.INFO
        assert resolve_verbosity(quiet=True, env={}).level == logging.ERROR

    def test_stream_follows_level(self):
        assert resolve_verbosity(verbose=True, env={}).stream_output
        assert resolve_verbosity(debug=True, env={}).stream_output
        assert not resolve_verbosity(quiet=True, env={}).stream_output

    def test_env_level_does_not_stream(self):
        verbosity = resolve_verbosity(env={LEVEL_ENV_VAR: "INFO"})
        assert verbosity.level == logging.INFO
        assert not verbosity.stream_output

    def test_flags_beat_env(self):
        assert resolve_verbosity(quiet=True, env={LEVEL_ENV_VAR: "DEBUG"}).level == logging.ERROR


class TestConfigureLogging:
    def test_console_handler_only(self):
        configure_logging(Verbosity(logging.INFO), env={})
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_reconfigure_replaces_handlers(self):
        configure_logging(Verbosity(logging.INFO), env={})
        configure_logging(Verbosity(logging.ERROR), env={})
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.ERROR

    def test_file_handler_defaults_to_debug(self, tmp_path):
        log_file = tmp_path / "run.log"
        configure_logging(Verbosity(logging.WARNING), env={FILE_ENV_VAR: str(log_file)})

        root = logging.getLogger()
        assert len(root.handlers) == 2
        # Root drops to the more verbose of the two handlers
        assert root.level == logging.DEBUG

        logging.getLogger("pyaltinstall.test").debug("build detail")
        for handler in root.handlers:
            handler.flush()
        assert "build detail" in log_file.read_text()

    def test_file_level(self, tmp_path):
        env = {FILE_ENV_VAR: str(tmp_path / "run.log"), FILE_LEVEL_ENV_VAR: "ERROR"}
        configure_logging(Verbosity(logging.WARNING), env=env)
        assert logging.getLogger().level == logging.WARNING
