import logging
import socket

import structlog

from settings import SETTINGS

APPLICATION = f"{SETTINGS.APPLICATION_NAME}-{SETTINGS.APPLICATION_VERSION}"

_TEXT_FORMAT = (
    "%(asctime)s [%(application)s] [%(hostname)s] [%(name)s] "
    "%(levelname)s: %(message)s"
)


class ContextFilter(logging.Filter):
    """
    Adds hostname and application to records for the text formatter.
    """

    def filter(self, record):
        record.hostname = socket.gethostname()
        record.application = APPLICATION
        return True


def _add_context(logger, method_name, event_dict):
    """
    structlog processor, same fields as ContextFilter.
    """
    event_dict["hostname"] = socket.gethostname()
    event_dict["application"] = APPLICATION
    return event_dict


def _formatter(json_formatter: bool) -> logging.Formatter:
    if not json_formatter:
        return logging.Formatter(_TEXT_FORMAT)

    return structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(sort_keys=True),
        foreign_pre_chain=[
            _add_context,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
        ],
    )


def get_logger(
    module_name: str,
    log_file: str = None,
    stream_logger: bool = True,
    debug: bool = False,
    json_formatter: bool = False,
) -> logging.Logger:
    """
    Sets up the named logger with a stream handler (stderr) and optionally a
    file handler, both formatted as text or, with json_formatter, as one JSON
    object per line via structlog's ProcessorFormatter.

    Calling it again for the same name replaces the previous handlers.

    :param module_name: name of module, where get_logger will be used
    :param log_file: path to file, enables logging to file
    :param stream_logger: enables logging to standard error
    :param debug: enables debug logging level
    :param json_formatter: formats logs in json
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.handlers = []
    logger.filters = []
    logger.propagate = False

    formatter = _formatter(json_formatter)
    if not json_formatter:
        logger.addFilter(ContextFilter())

    handlers = []
    if stream_logger:
        handlers.append(logging.StreamHandler())
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
