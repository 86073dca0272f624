"""JSON logging configuration for certificate renewal scheduling."""

import logging

from pythonjsonlogger.json import JsonFormatter

ALLOWED_FIELDS = frozenset(
    {
        "timestamp",
        "level",
        "message",
        "exc_info",
        "funcName",
        "lineno",
    }
)


class RenewalJsonFormatter(JsonFormatter):
    """JSON formatter that keeps only the fields operators read.

    Drops module, process, thread and logger name fields so each schedule
    decision fits on one short line.
    """

    def add_fields(self, log_record, record, message_dict):
        """Rename levelname to level and strip everything outside ALLOWED_FIELDS."""
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        for key in [key for key in log_record if key not in ALLOWED_FIELDS]:
            log_record.pop(key)


def _setup_logger() -> logging.Logger:
    logger = logging.getLogger("cert_renewal")

    # Module may be reloaded by test runners
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        RenewalJsonFormatter(
            fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
            timestamp=True,
        )
    )

    logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


LOGGER = _setup_logger()
