"""Tests for the logging setup helpers."""

from __future__ import annotations

import logging

from drivescore.infra.logging import (
    LOG_LEVEL_ENV,
    LOGGER_NAMESPACE,
    get_current_log_path,
    get_logger,
    init_logging,
    log_banner,
)


class TestGetLogger:

    def test_default_is_the_namespace(self) -> None:
        assert get_logger().name == LOGGER_NAMESPACE
        assert get_logger("drivescore").name == LOGGER_NAMESPACE

    def test_package_module_names_are_kept(self) -> None:
        assert get_logger("drivescore.scoring.engine").name == "drivescore.scoring.engine"

    def test_other_names_are_nested(self) -> None:
        assert get_logger("bulk_score_trips").name == "drivescore.bulk_score_trips"
        assert get_logger("__main__").name == "drivescore.__main__"


class TestInitLogging:

    def test_level_parameter(self, monkeypatch) -> None:
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        logger = init_logging(level="WARNING")
        assert logger is logging.getLogger(LOGGER_NAMESPACE)
        assert logger.level == logging.WARNING
        assert get_current_log_path() is None

    def test_environment_overrides_level(self, monkeypatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
        init_logging(level="ERROR")
        assert logging.getLogger(LOGGER_NAMESPACE).level == logging.DEBUG

    def test_unknown_level_means_info(self, monkeypatch) -> None:
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        init_logging(level="chatty")
        assert logging.getLogger(LOGGER_NAMESPACE).level == logging.INFO

    def test_root_logger_is_left_alone(self, monkeypatch) -> None:
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        root = logging.getLogger()
        before = (list(root.handlers), root.level)
        init_logging(level="DEBUG")
        assert (list(root.handlers), root.level) == before

    def test_log_file(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        target = tmp_path / "nested" / "run.log"
        init_logging(level="INFO", log_file=target)

        get_logger("test").info("hello from the test")
        for handler in logging.getLogger(LOGGER_NAMESPACE).handlers:
            handler.flush()

        assert get_current_log_path() == target.resolve()
        text = target.read_text(encoding="utf-8")
        assert "[INFO][drivescore.test] hello from the test" in text

    def test_per_run_file_in_logs_dir(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        init_logging(level="INFO", write_output=True, logs_dir=tmp_path)

        path = get_current_log_path()
        assert path is not None
        assert path.parent == tmp_path.resolve()
        assert path.suffix == ".log"
        assert "__" in path.stem

    def test_repeated_calls_replace_handlers(self, monkeypatch) -> None:
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        init_logging(level="INFO")
        init_logging(level="INFO")
        assert len(logging.getLogger(LOGGER_NAMESPACE).handlers) == 1


class TestLogBanner:

    def test_plain(self, caplog) -> None:
        log = get_logger("drivescore.banner")
        with caplog.at_level(logging.INFO, logger="drivescore.banner"):
            log_banner(log, "Summary", width=10)
        assert [r.getMessage() for r in caplog.records] == ["=" * 10, "Summary", "=" * 10]

    def test_box(self, caplog) -> None:
        log = get_logger("drivescore.banner")
        with caplog.at_level(logging.INFO, logger="drivescore.banner"):
            log_banner(log, "Run", width=9, box=True)
        lines = [r.getMessage() for r in caplog.records]
        assert lines == ["╔═════════╗", "║   Run   ║", "╚═════════╝"]
