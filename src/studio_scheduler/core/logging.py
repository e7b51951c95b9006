import logging
import sys

LOGGER_NAME = "studio_scheduler"

logger = logging.getLogger(LOGGER_NAME)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler to the application logger, once."""
    logger.setLevel(level.upper())

    # Prevent duplicate handlers when the app factory runs more than once
    if not logger.handlers:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(stream_handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logger.getChild(name)
