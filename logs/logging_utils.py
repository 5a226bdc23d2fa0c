"""Logging configuration helpers for the CLI and tests."""

import logging

# Index = number of -v flags (clamped)
_LEVELS = (
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
)


def verbosity_to_level(
    verbosity: int,
) -> int:
    """Map a ``-v`` count to a logging level (WARNING, INFO, DEBUG)."""
    return _LEVELS[max(0, min(verbosity, len(_LEVELS) - 1))]


def setup_logging(
    verbosity: int,
    log_file: str | None = None,
) -> None:
    """Configure root logging for a CLI run.

    Parameters
    ----------
    verbosity : int
        Count of ``-v`` flags; higher means more verbose.
    log_file : str or None
        Extra log file (UTF-8, always at DEBUG), or ``None`` to log to stderr
        only.
    """
    level = verbosity_to_level(verbosity)

    console = logging.StreamHandler()
    console.setLevel(level)
    handlers: list[logging.Handler] = [console]
    root_level = level
    if log_file:
        file_handler = logging.FileHandler(
            log_file,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)
        root_level = logging.DEBUG
    logging.basicConfig(
        level=root_level,
        format="%(asctime)s %(levelname).1s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,  # reset prior basicConfig runs
    )
