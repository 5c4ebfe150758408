"""Tests for the console logger."""

import io

import pytest
from chix8.logging import ConsoleLogger, build_progress_bar


def test_level_filtering():
    stream = io.StringIO()
    logger = ConsoleLogger(log_level="WARNING", show_timestamps=False, stream=stream)

    logger.info("hidden")
    logger.warning("shown")

    output = stream.getvalue()
    assert "hidden" not in output
    assert "[ WARNING][chix8] shown" in output


def test_unknown_level():
    with pytest.raises(ValueError):
        ConsoleLogger(log_level="LOUD")


def test_no_colors_on_plain_stream():
    stream = io.StringIO()
    logger = ConsoleLogger(use_colors=True, stream=stream)
    logger.error("boom")
    assert "\033[" not in stream.getvalue()


def test_progress_bar():
    update, close = build_progress_bar(4, disable=True)
    update(2)
    update(2)
    close()
