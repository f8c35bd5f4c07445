from pathlib import Path

from src.utils.core import logger as logger_mod


def test_get_logger_creates_file(tmp_path: Path, monkeypatch) -> None:
    """Ensure the central logger writes a log file sink for a bound utility logger."""
    monkeypatch.setenv("LOG_TO_FILE", "1")
    monkeypatch.setattr(logger_mod, "LOGS_BASE_DIR", tmp_path)

    try:
        lg = logger_mod.get_logger(__name__, utility="testutil")
        if not hasattr(lg, "info"):
            raise AssertionError("bound logger is missing 'info' method")

        # Emit a log and flush queued sinks
        lg.info("unit test log entry")
        logger_mod.shutdown_logging()

        util_dir = tmp_path / "testutil"
        files = list(util_dir.glob("testutil_*.log"))
        if not files:
            raise AssertionError(f"no log files were created in {util_dir}")
        assert "unit test log entry" in files[0].read_text(encoding="utf-8")
    finally:
        logger_mod.shutdown_logging()


def test_utility_is_detected_from_module_name(monkeypatch) -> None:
    """Loggers are bound to a utility derived from their module name."""
    monkeypatch.delenv("LOG_TO_FILE", raising=False)
    loggers = [
        logger_mod.get_logger("src.data_collector.yahoo_data.ticker"),
        logger_mod.get_logger("src.data_collector.other"),
        logger_mod.get_logger("scripts.misc"),
    ]

    seen = []
    sink_id = logger_mod._loguru_logger.add(
        lambda message: seen.append(message.record["extra"]["utility"]), level="INFO"
    )
    try:
        for lg in loggers:
            lg.info("utility check")
    finally:
        logger_mod._loguru_logger.remove(sink_id)

    assert seen == ["yahoo_data", "data_collector", "general"]
