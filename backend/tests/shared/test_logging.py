import json
import logging
import sys

from shared.logging import JSONFormatter, configure_logging


def _record(msg="hello %s", args=("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord("resume.test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_basic_fields():
    data = json.loads(JSONFormatter().format(_record()))
    assert data["level"] == "INFO"
    assert data["logger"] == "resume.test"
    assert data["message"] == "hello world"
    assert "timestamp" in data


def test_json_formatter_extra_fields():
    data = json.loads(JSONFormatter().format(_record(document_id=7, payload={"a": 1})))
    assert data["document_id"] == 7
    assert data["payload"] == "{'a': 1}"


def test_json_formatter_exception():
    try:
        raise ValueError("bad position")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()
    data = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad position" in data["exception"]


def test_configure_logging_json():
    logger = configure_logging(log_format="json", log_level="debug", logger_name="resume.json")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JSONFormatter)


def test_configure_logging_replaces_handlers():
    configure_logging(logger_name="resume.text")
    logger = configure_logging(log_level="WARNING", logger_name="resume.text")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0].formatter, JSONFormatter)
