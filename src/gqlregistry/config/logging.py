"""Logging setup for processes that embed a registry."""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "gqlregistry"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Install a stream handler on the root logger and set the package level.

    Only ``gqlregistry.*`` loggers follow ``level``; everything else keeps the
    root default. Pass ``force=True`` to replace handlers installed earlier.
    """

    logging.basicConfig(format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
