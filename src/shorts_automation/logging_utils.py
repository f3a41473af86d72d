"""Logger factory. Components receive the returned logger in their constructor."""

import logging
import sys

LOG_FORMAT = "[AI-GEN] %(asctime)s %(filename)s:%(lineno)d %(levelname)s: %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def get_logger(name: str = "ai_gen", level: int = logging.INFO) -> logging.Logger:
    """Return a logger writing to stdout; handlers are attached only once per name."""
    logger = logging.getLogger(name)
    if not any(getattr(h, "_ai_gen_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._ai_gen_handler = True
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(level)
    return logger
