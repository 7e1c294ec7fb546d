import json
import socket

from uuid import uuid4

import pytest

from reporter.local import APPLICATION, get_logger


@pytest.fixture
def log_file_path(working_directory):
    return f"{working_directory.strpath}/{uuid4()}.log"


def test_get_logger_stderr(capsys):
    logger = get_logger(module_name=str(uuid4()))

    logging_entry = "some random entry"
    logger.info(logging_entry)

    captured = capsys.readouterr()
    assert logging_entry in captured.err
    assert f"[{APPLICATION}]" in captured.err
    assert f"[{socket.gethostname()}]" in captured.err

    logger.debug(logging_entry)

    captured = capsys.readouterr()
    assert logging_entry not in captured.err


def test_get_logger_stderr_debug(capsys):
    logger = get_logger(module_name=str(uuid4()), debug=True)

    logging_entry = "some random entry"
    logger.debug(logging_entry)

    captured = capsys.readouterr()
    assert logging_entry in captured.err


def test_get_logger_without_stream(capsys, log_file_path):
    logger = get_logger(
        module_name=str(uuid4()), log_file=log_file_path, stream_logger=False
    )

    logger.info("to file only")

    assert capsys.readouterr().err == ""
    with open(log_file_path) as log_file:
        assert "to file only" in log_file.read()


def test_get_logger_replaces_handlers():
    module_name = str(uuid4())

    get_logger(module_name)
    logger = get_logger(module_name)

    assert len(logger.handlers) == 1
    assert len(logger.filters) == 1


def test_get_logger_stderr_json(capsys):
    module_name = str(uuid4())
    logger = get_logger(
        module_name=module_name, debug=True, json_formatter=True
    )

    logger.debug("requested instance %s", "i-0123")

    result = json.loads(capsys.readouterr().err)

    assert result.pop("timestamp")
    assert result == {
        "application": APPLICATION,
        "event": "requested instance i-0123",
        "hostname": socket.gethostname(),
        "level": "debug",
        "logger": module_name,
    }


def test_get_logger_file_json(log_file_path):
    module_name = str(uuid4())
    logger = get_logger(
        module_name=module_name,
        log_file=log_file_path,
        stream_logger=False,
        json_formatter=True,
    )

    logger.info("some random entry")

    with open(log_file_path, "r") as log_file:
        result = json.loads(log_file.read())

    assert result["event"] == "some random entry"
    assert result["level"] == "info"
    assert result["logger"] == module_name
