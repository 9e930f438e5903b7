"""
Shared utilities for nakedfs gates.
"""

from .gate import GateLogger, get_logger

__all__ = ["GateLogger", "get_logger"]
