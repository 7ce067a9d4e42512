import logging
import os
import sys


def configure_logging(level: int = logging.INFO) -> None:
    """Configure the root logger with a single stdout handler.

    Respects the KM_LOG_LEVEL env var if present.
    """
    level_name = os.getenv("KM_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)

    handler = logging.StreamHandler(stream=sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers to avoid duplicates in repeated test runs
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
