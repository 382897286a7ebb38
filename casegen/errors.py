#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error taxonomy for casegen.

Three kinds of failure exist:
- configuration errors, raised while building node trees from a config file
  or attaching illegal domains (InvalidConfigError);
- generation errors, raised when values are requested from a node whose
  domain was never set (GenerationError);
- execution failures, raised by runners when an implementation crashes,
  exits non-zero or times out (ExecutionFailure). The oracle turns reference
  failures into SetupFailure records and candidate failures into kills.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class CaseGenError(Exception):
    """Base class for all casegen errors."""


class InvalidConfigError(CaseGenError):
    """A configuration file or a domain attached to a node is malformed."""


class GenerationError(CaseGenError):
    """Values were requested from an empty or unset domain."""


class ExecutionFailureType(Enum):
    """How an implementation failed to produce an output.

    - EXCEPTION: the function raised (in-process runners)
    - NONZERO_EXIT: the interpreter running the function exited non-zero
    - TIMEOUT: the invocation exceeded its time limit
    - MISSING_FUNCTION: the implementation does not define the function
    """

    EXCEPTION = "exception"
    NONZERO_EXIT = "nonzero_exit"
    TIMEOUT = "timeout"
    MISSING_FUNCTION = "missing_function"

    @property
    def is_timeout(self) -> bool:
        """Whether the failure was caused by the time limit."""
        return self is ExecutionFailureType.TIMEOUT


class ExecutionFailure(CaseGenError):
    """An implementation could not produce an output for a test case."""

    def __init__(
        self,
        failure_type: ExecutionFailureType,
        runner_id: str,
        detail: str = "",
    ):
        self.failure_type = failure_type
        self.runner_id = runner_id
        self.detail = detail
        message = f"{runner_id}: {failure_type.value}"
        if detail:
            message += f" - {detail}"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "runner": self.runner_id,
            "failure_type": self.failure_type.value,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class SetupFailure:
    """A test case dropped because the reference failed on it."""

    args: Tuple[Any, ...]
    failure: ExecutionFailure

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        data = self.failure.to_dict()
        data["args"] = repr(self.args)
        return data


def timeout_failure(runner_id: str, timeout_seconds: Optional[float] = None) -> ExecutionFailure:
    """Create a TIMEOUT failure."""
    detail = f"no result after {timeout_seconds}s" if timeout_seconds else "timed out"
    return ExecutionFailure(ExecutionFailureType.TIMEOUT, runner_id, detail)


def exception_failure(runner_id: str, exc: BaseException) -> ExecutionFailure:
    """Create an EXCEPTION failure from a raised exception."""
    return ExecutionFailure(
        ExecutionFailureType.EXCEPTION,
        runner_id,
        f"{type(exc).__name__}: {exc}",
    )
