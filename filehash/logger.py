import logging
import os
import sys

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


# ANSI color codes for terminal output
class ANSIColors:
    """Options for colors."""

    DEBUG = "\033[36m"    # Cyan
    INFO = "\033[32m"     # Green
    WARNING = "\033[33m"  # Yellow
    ERROR = "\033[31m"    # Red
    CRITICAL = "\033[1;31m"  # Bold Red
    RESET = "\033[0m"     # Reset color


class CustomFormatter(logging.Formatter):
    """Formatter that colors records, or emits GitHub Actions annotations."""

    def __init__(self, fmt=LOG_FORMAT, github_actions=None, use_color=True):
        super().__init__(fmt)
        if github_actions is None:
            github_actions = os.getenv("GITHUB_ACTIONS") == "true"
        self.github_actions = github_actions
        self.use_color = use_color

    def format(self, record):
        """Perform formatting of record."""
        log_message = super().format(record)

        if self.github_actions:
            if record.levelno == logging.DEBUG:
                return f"::debug::{log_message}"
            elif record.levelno == logging.WARNING:
                return f"::warning::{log_message}"
            elif record.levelno >= logging.ERROR:
                return f"::error::{log_message}"
            return log_message  # INFO level remains unchanged

        if not self.use_color:
            return log_message

        log_color = {
            logging.DEBUG: ANSIColors.DEBUG,
            logging.INFO: ANSIColors.INFO,
            logging.WARNING: ANSIColors.WARNING,
            logging.ERROR: ANSIColors.ERROR,
            logging.CRITICAL: ANSIColors.CRITICAL,
        }.get(record.levelno, ANSIColors.RESET)

        return f"{log_color}{log_message}{ANSIColors.RESET}"


def setup_logging(level="INFO", stream=None):
    """Install a single stderr handler on the filehash logger tree."""
    level = level.upper()
    if level not in VALID_LOG_LEVELS:
        level = "INFO"

    stream = stream if stream is not None else sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(CustomFormatter(use_color=stream.isatty()))

    root = logging.getLogger("filehash")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level))
    root.propagate = False
    return root


def get_logger(name: str):
    """Return a logger for the given module under the filehash namespace."""
    return logging.getLogger(f"filehash.{name.split('.')[-1]}")
