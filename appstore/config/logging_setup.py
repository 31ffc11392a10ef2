"""Process-wide logging setup for runtime entrypoints."""

import logging

SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_UVICORN_LOGGER_NAMES = ("uvicorn", "uvicorn.error", "uvicorn.access")


def config_configure_logging(level: str) -> None:
    """Install a root stream handler when none exists and apply the configured level.

    Args:
        level: Log level name such as `INFO` or `DEBUG`.

    Returns:
        None: Configures logging as a side effect.

    Raises:
        ValueError: Raised when level is not a known logging level name.
    """

    normalized_level = level.strip().upper()
    if normalized_level not in SUPPORTED_LOG_LEVELS:
        raise ValueError(f"unsupported log level={level}")

    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(normalized_level)
    for logger_name in _UVICORN_LOGGER_NAMES:
        logging.getLogger(logger_name).setLevel(normalized_level)
