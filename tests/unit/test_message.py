"""
Tests for the logging helpers behind the Log facade.
"""
import logging

from defi_composer.utils.message import (
    ColorFormatter,
    Log,
    get_log_file_path,
    init_logger,
    purge_old_logs,
)


class TestInitLogger:
    """Tests for init_logger()."""

    def test_no_duplicate_handlers(self):
        """Test initializing twice does not stack handlers."""
        first = init_logger(name="DefiComposerTestLogger")
        second = init_logger(name="DefiComposerTestLogger")
        assert first is second
        assert len(second.handlers) == 1

    def test_console_only_by_default(self):
        """Test file logging is off unless requested."""
        logger = init_logger(name="DefiComposerConsoleLogger")
        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)


class TestLogFiles:
    """Tests for log file naming and rotation."""

    def test_file_name(self, tmp_path):
        """Test timestamped name inside the folder."""
        path = get_log_file_path(str(tmp_path))
        assert path.startswith(str(tmp_path))
        assert path.endswith(".log")
        assert "defi_composer_" in path

    def test_purge_keeps_newest(self, tmp_path):
        """Test only the most recent files survive."""
        for day in range(1, 6):
            (tmp_path / f"defi_composer_2024-01-0{day}_000000.log").write_text("")
        (tmp_path / "other.log").write_text("")

        purge_old_logs(str(tmp_path), keep=2)

        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "defi_composer_2024-01-04_000000.log",
            "defi_composer_2024-01-05_000000.log",
            "other.log",
        ]


class TestFacade:
    """Tests for the Log facade and formatter."""

    def test_set_level_by_name(self):
        """Test string levels are mapped."""
        Log.set_level("debug")
        assert Log.get_logger().level == logging.DEBUG

    def test_color_formatter_keeps_record(self):
        """Test colouring does not leak into the original record."""
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
        output = ColorFormatter("%(levelname)s %(message)s").format(record)
        assert "WARNING" in output
        assert "careful" in output
        assert record.levelname == "WARNING"
