"""Logging setup for the admin CLI"""

import logging
import os

from settings import LOG_LEVEL, DEBUG_LOG_FILE


def configure_logging(debug: bool = False, log_file: str = DEBUG_LOG_FILE) -> None:
    """Configure the root logger

    Normal runs log at LOG_LEVEL to stderr. Debug runs additionally append
    everything to a debug log file.

    Args:
        debug: Whether debug mode is enabled
        log_file: Path of the debug log file
    """
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if not debug:
        level = getattr(logging, str(LOG_LEVEL).upper(), logging.INFO)
        root_logger.setLevel(level)
        console_handler.setLevel(level)
        return

    root_logger.setLevel(logging.DEBUG)
    console_handler.setLevel(logging.DEBUG)

    log_path = os.path.abspath(log_file)
    file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    # httpx logs every request line at INFO; keep it but not the wire chatter
    logging.getLogger("httpcore").setLevel(logging.INFO)

    logging.getLogger(__name__).info(f"Debug logging enabled - appending to {log_path}")
