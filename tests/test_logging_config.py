import logging

from quote_feed.utils.logging_config import configure_logging


def test_configure_logging_sets_requested_level() -> None:
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG

    configure_logging("not-a-level")
    assert logging.getLogger().level == logging.INFO
