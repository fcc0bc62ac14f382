import signal
import sys

from utils.logger_utils import get_logger

logger = get_logger("Signal Utils")


def configure_signals():
    """
    Turns SIGTERM into SystemExit so the relay's finally blocks close the publisher.
    """

    def sigterm_handler(_signo, _stack_frame):
        logger.info("Received SIGTERM. Shutting down relay...")
        sys.exit(0)

    signal.signal(signal.SIGTERM, sigterm_handler)
