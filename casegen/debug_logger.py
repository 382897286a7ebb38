#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Centralized debug logging system for the casegen CLI.

This module provides structured debug logging that can be enabled with the
--debug flag. Generation, oracle and minimization events are written to a log
file in the .casegen/logs directory, one JSON payload per event, so a run can
be reconstructed afterwards (which candidates failed, which test cases were
picked and why).
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from casegen import config


def prune_old_logs(log_dir: Path, keep: int) -> None:
    """Remove old log files beyond the configured retention limit."""

    if keep < 1 or not log_dir.exists():
        return

    log_files = sorted(
        [path for path in log_dir.glob("*.log") if path.is_file()],
        key=lambda path: path.stat().st_mtime,
        reverse=True,
    )

    for stale_file in log_files[keep:]:
        try:
            stale_file.unlink()
        except OSError:
            # Best-effort cleanup; a locked file is retried on the next run
            continue


class DebugLogger:
    """Centralized debug logger with component-specific logging."""

    _instance: Optional['DebugLogger'] = None
    _enabled: bool = False
    _log_file: Optional[Path] = None
    _loggers: Dict[str, logging.Logger] = {}

    def __init__(self, enabled: bool = False, log_dir: Optional[Path] = None):
        """Initialize the debug logger.

        Args:
            enabled: Whether debug logging is enabled
            log_dir: Directory to store log files (defaults to .casegen/logs/)
        """
        self._enabled = enabled
        self._loggers = {}

        if enabled:
            if log_dir is None:
                log_dir = config.LOGS_DIR
            log_dir.mkdir(exist_ok=True, parents=True)

            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self._log_file = log_dir / f"casegen_debug_{timestamp}.log"

            self._setup_logging()

            prune_old_logs(log_dir, config.LOG_RETENTION_LIMIT)

            self.log("system", "DEBUG_SESSION_START", {
                "timestamp": datetime.now().isoformat(),
                "log_file": str(self._log_file),
                "cwd": str(Path.cwd())
            })

    @classmethod
    def initialize(cls, enabled: bool = False, log_dir: Optional[Path] = None) -> 'DebugLogger':
        """Initialize the global debug logger instance.

        Args:
            enabled: Whether debug logging is enabled
            log_dir: Directory to store log files

        Returns:
            The DebugLogger instance
        """
        if cls._instance is None:
            cls._instance = cls(enabled, log_dir)
        return cls._instance

    @classmethod
    def get_instance(cls) -> 'DebugLogger':
        """Get the global debug logger instance."""
        if cls._instance is None:
            cls._instance = cls(enabled=False)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Close and drop the global instance."""
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = None

    def _setup_logging(self):
        """Set up the logging configuration."""
        formatter = logging.Formatter(
            '%(asctime)s | %(name)-20s | %(levelname)-8s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        file_handler = logging.FileHandler(self._log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)

        root_logger = logging.getLogger('casegen')
        root_logger.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)
        root_logger.propagate = False

    def get_logger(self, component: str) -> logging.Logger:
        """Get or create a logger for a specific component.

        Args:
            component: Component name (e.g., 'nodes', 'oracle', 'minimizer')

        Returns:
            Logger instance for the component
        """
        if component not in self._loggers:
            self._loggers[component] = logging.getLogger(f'casegen.{component}')
        return self._loggers[component]

    def log(self, component: str, event: str, data: Optional[Dict[str, Any]] = None, level: str = "INFO"):
        """Log a structured event.

        Args:
            component: Component name (e.g., 'nodes', 'oracle', 'minimizer')
            event: Event type/name
            data: Optional dictionary of event data
            level: Log level (DEBUG, INFO, WARNING, ERROR)
        """
        if not self._enabled:
            return

        logger = self.get_logger(component)

        message = f"[{event}]"
        if data:
            message += f" {json.dumps(data, indent=2, default=str)}"

        log_level = getattr(logging, level.upper(), logging.INFO)
        logger.log(log_level, message)

    def log_invocation(self, runner_id: str, args: Any, result: Any = None, error: Optional[str] = None):
        """Log a single implementation invocation.

        Args:
            runner_id: Identifier of the reference or candidate runner
            args: Test case arguments
            result: Output of the implementation
            error: Failure description if the invocation failed
        """
        if not self._enabled:
            return

        data = {
            "runner": runner_id,
            "args": str(args)[:200],
        }

        if error:
            data["error"] = str(error)
            level = "WARNING"
        else:
            data["result_preview"] = str(result)[:200]
            level = "DEBUG"

        self.log("oracle", "INVOCATION", data, level)

    def log_error(self, component: str, error: Exception, context: Optional[Dict[str, Any]] = None):
        """Log an error with context.

        Args:
            component: Component where error occurred
            error: The exception
            context: Optional context information
        """
        if not self._enabled:
            return

        data = {
            "error_type": type(error).__name__,
            "error_message": str(error),
        }
        if context:
            data["context"] = context

        self.log(component, "ERROR", data, "ERROR")

    def log_workflow_phase(self, phase: str, details: Optional[Dict[str, Any]] = None):
        """Log a workflow phase transition.

        Args:
            phase: Phase name (e.g., 'parse', 'generate', 'evaluate', 'minimize')
            details: Optional phase details
        """
        if not self._enabled:
            return

        data = {"phase": phase}
        if details:
            data.update(details)

        self.log("main", "WORKFLOW_PHASE", data, "INFO")

    @property
    def enabled(self) -> bool:
        """Check if debug logging is enabled."""
        return self._enabled

    @property
    def log_file_path(self) -> Optional[Path]:
        """Get the path to the current log file."""
        return self._log_file

    def close(self):
        """Close the logger and write session end marker."""
        if self._enabled:
            self.log("system", "DEBUG_SESSION_END", {
                "timestamp": datetime.now().isoformat()
            })

            root_logger = logging.getLogger('casegen')
            for handler in root_logger.handlers[:]:
                handler.close()
                root_logger.removeHandler(handler)


# Convenience functions for global logger access
def get_logger() -> DebugLogger:
    """Get the global debug logger instance."""
    return DebugLogger.get_instance()


def is_debug_enabled() -> bool:
    """Check if debug logging is enabled."""
    return get_logger().enabled
