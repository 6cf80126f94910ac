import logging

from openapi_to_code.logging import configure_logging, get_logger


def test_get_logger_is_namespaced():
    assert get_logger("emitter").name == "openapi_to_code.emitter"
    assert get_logger().name == "openapi_to_code"


def test_configure_logging_levels(tmp_path):
    log_file = tmp_path / "run.log"
    logger = configure_logging(verbose=True, log_file=log_file)
    try:
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        get_logger("test").debug("hello %s", "file")
        for handler in logger.handlers:
            handler.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")

        logger = configure_logging()
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.propagate = True
