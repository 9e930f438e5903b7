"""
Shared Gate utilities for nakedfs.

Every gate logs through a child of the ``nakedfs`` logger:
- GateLogger: namespaced loggers and level control
- get_logger: Shortcut for GateLogger.get()
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Union


ROOT_LOGGER_NAME = "nakedfs"
LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"
DEFAULT_LEVEL = logging.WARNING


def _resolve_level(level: Union[int, str]) -> int:
    """Turn a level name such as "debug" into its numeric value."""
    if isinstance(level, int):
        return level

    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown logging level: {level}")
    return numeric


# =============================================================================
# GateLogger - Namespaced logging for all Gates
# =============================================================================


class GateLogger:
    """
    Namespaced logging for all Gates.

    A host application tunes or silences the whole library through the
    ``nakedfs`` logger, or a single gate through ``nakedfs.<gate>``.
    """

    _loggers: Dict[str, logging.Logger] = {}
    _configured = False

    @classmethod
    def _install_root_handler(cls):
        """Give the nakedfs logger a stream handler, once, unless the host already did."""
        if cls._configured:
            return

        root = logging.getLogger(ROOT_LOGGER_NAME)
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(handler)
            root.setLevel(DEFAULT_LEVEL)

        cls._configured = True

    @classmethod
    def get(cls, gate_name: str) -> logging.Logger:
        """
        Get the logger for a gate.

        Args:
            gate_name: Name of the gate (e.g., "FileSystemGate", "Config")

        Returns:
            The ``nakedfs.<gate_name>`` logger
        """
        cls._install_root_handler()

        name = f"{ROOT_LOGGER_NAME}.{gate_name}"
        logger = cls._loggers.get(name)
        if logger is None:
            logger = cls._loggers[name] = logging.getLogger(name)
        return logger

    @classmethod
    def set_level(cls, level: Union[int, str], gate_name: Optional[str] = None):
        """
        Set the logging level.

        Args:
            level: Numeric level or level name ("DEBUG", "info", ...)
            gate_name: Gate to change, or None for the whole library

        Raises:
            ValueError: If ``level`` is an unknown name
        """
        numeric = _resolve_level(level)

        if gate_name:
            cls.get(gate_name).setLevel(numeric)
            return

        cls._install_root_handler()
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(numeric)


def get_logger(gate_name: str) -> logging.Logger:
    """Shortcut for GateLogger.get()."""
    return GateLogger.get(gate_name)
