"""Logging utilities for mesh operations."""

import logging
import json
from typing import Any

class StructuredLogger:
    """Logger that adds structured context to messages."""
    
    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, msg: str, **context: Any):
        """Log debug message with structured context."""
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any):
        """Log info message with structured context."""
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any):
        """Log warning message with structured context."""
        self._log(logging.WARNING, msg, **context)

    def error(self, msg: str, **context: Any):
        """Log error message with structured context."""
        self._log(logging.ERROR, msg, **context)
        
    def _log(self, level: int, msg: str, **context: Any):
        """Internal method to format and log messages."""
        if not self.logger.isEnabledFor(level):
            return
        if context:
            msg = f"{msg} | {json.dumps(context, default=str, sort_keys=True)}"
        self.logger.log(level, msg)

# Create default logger instance
mesh_logger = StructuredLogger("heightmesh.model.mesh")
