"""Logging utilities tailored for the nonogram engine."""

from __future__ import annotations

import logging
from typing import Optional

ENGINE_LOGGER = "nonogram"


def configure_logging(level: int = logging.INFO, *, engine_level: Optional[int] = None) -> None:
    """Configure root logging with a sensible formatter.

    Repair and generation run many reclassifications, so per-attempt detail
    is logged at DEBUG and only outcomes at INFO/WARNING. ``engine_level``
    sets the ``nonogram`` logger on its own, e.g. DEBUG pass traces while
    everything else stays at ``level``.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    set_engine_level(engine_level)


def set_engine_level(level: Optional[int]) -> None:
    """Override the level of the engine loggers; ``None`` defers to the root."""

    logging.getLogger(ENGINE_LOGGER).setLevel(logging.NOTSET if level is None else level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or ENGINE_LOGGER)
