"""
Logging utilities for seqsim.

Console output goes through a Rich handler; a run can additionally append
plain-text records to a log file (whose parent directory is created on demand).
"""

import logging
import time
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "console",
    "setup_logging",
    "timed",
]

LOG_FORMAT = "%(asctime)s [%(threadName)s] %(levelname)-5s %(name)s - %(message)s"

# Shared by the pipeline, the progress bars and the CLI error messages
console = Console(stderr=True)


def setup_logging(verbose: bool = False, log_file: str | Path | None = None) -> None:
    """
    Route seqsim logs to the console and, optionally, a log file.

    Args:
        verbose: Log at DEBUG instead of INFO.
        log_file: Path to append plain-text logs to.
    """
    handlers: list[logging.Handler] = [
        RichHandler(console=console, rich_tracebacks=True, markup=False, show_path=verbose)
    ]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )

    if log_file:
        logging.getLogger(__name__).info("Logging to file: %s", log_file)


@contextmanager
def timed(operation: str, logger: logging.Logger | None = None):
    """
    Log, at DEBUG, how long the wrapped block took.

    Example:
        with timed("Injecting chr1", logger):
            injector.apply_all(variants)
    """
    log = logger or logging.getLogger(__name__)
    start = time.perf_counter()
    log.debug("Starting: %s", operation)
    try:
        yield
    finally:
        log.debug("Completed: %s (%.3fs)", operation, time.perf_counter() - start)
