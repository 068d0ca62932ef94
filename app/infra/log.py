import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root_logger = logging.getLogger()
    resolved = getattr(logging, level.upper(), logging.INFO)
    if not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT, level=resolved)
    else:
        root_logger.setLevel(resolved)
