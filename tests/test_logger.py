import logging

from song_recommender.logger import configure_logging, get_logger


def test_configure_logging_sets_root_level() -> None:
    root_logger = logging.getLogger()
    original_level = root_logger.level
    original_handlers = list(root_logger.handlers)

    try:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)

        configure_logging(level=logging.DEBUG)

        assert logging.getLogger().level == logging.DEBUG
    finally:
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        for handler in original_handlers:
            root_logger.addHandler(handler)
        root_logger.setLevel(original_level)


def test_get_logger_returns_named_logger() -> None:
    logger = get_logger("song_recommender.tests")

    assert logger.name == "song_recommender.tests"


def test_get_logger_defaults_to_package_name() -> None:
    assert get_logger().name == "song_recommender"
