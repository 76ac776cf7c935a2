"""Tests for scalebook.core.utils.logging."""

from loguru import logger

from scalebook.core.utils.logging import setup_logging


def test_file_sink_receives_messages(tmp_path):
    log_file = tmp_path / "logs" / "scalebook.log"
    setup_logging(level="INFO", log_file=str(log_file))
    logger.info("weigh-in saved")
    logger.debug("not written at INFO")
    logger.remove()

    text = log_file.read_text()
    assert "weigh-in saved" in text
    assert "not written" not in text


def test_level_is_case_insensitive(capsys):
    setup_logging(level="warning")
    logger.warning("careful")
    logger.info("quiet")
    logger.remove()

    err = capsys.readouterr().err
    assert "careful" in err
    assert "quiet" not in err
