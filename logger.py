import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("topk")


def setup_logging(level=logging.INFO):
    logging.basicConfig(level=level, format=LOG_FORMAT)


def print_(*args, level=logging.INFO):
    """Logs the space-joined arguments on the `topk` logger."""
    logger.log(level, " ".join(str(arg) for arg in args))
