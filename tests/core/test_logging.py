"""Tests for moodmorph.core.utils.logging."""

from loguru import logger

from moodmorph.core.utils.logging import log_file_in, setup_logging


class TestSetupLogging:
    def test_file_sink_captures_debug(self, tmp_path):
        log_file = tmp_path / "moodmorph.log"
        setup_logging(level="ERROR", log_file=str(log_file))

        logger.debug("stored key 'moodmorph_profiles'")
        logger.remove()

        assert "stored key 'moodmorph_profiles'" in log_file.read_text(encoding="utf-8")

    def test_console_level(self, tmp_path, capsys):
        setup_logging(level="warning")

        logger.info("quiet")
        logger.warning("loud")

        err = capsys.readouterr().err
        assert "loud" in err
        assert "quiet" not in err

    def test_log_file_in(self, tmp_path):
        assert log_file_in(tmp_path) == tmp_path / "moodmorph.log"
