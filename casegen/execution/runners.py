#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Implementation runners.

A runner executes one implementation of the function under test on one
argument tuple and returns its output, or raises ExecutionFailure. The
reference and every candidate are runners; the oracle does not care how they
execute.

SubprocessRunner is the runner used by the CLI: it imports the implementation
file in a fresh interpreter, so crashes, sys.exit() calls and infinite loops
in a candidate cannot take the generator down with it.

The child reports its return value on a single marked line holding a JSON
object with two fields:

- ``pickle``: the pickled value, base64 encoded, or null if it cannot be
  pickled. Only plain data types (builtins, a few collections, datetime,
  decimal and fraction types) are rebuilt from it in the parent.
- ``repr``: a textual description of the value. For objects that use the
  default ``object.__repr__`` it holds the type name and instance attributes.

Values the parent cannot rebuild come back as ReprResult, compared by their
description with memory addresses removed.
"""

import base64
import io
import json
import pickle
import re
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence

from casegen import config
from casegen.errors import (
    ExecutionFailure,
    ExecutionFailureType,
    exception_failure,
    timeout_failure,
)

RESULT_MARKER = "__CASEGEN_RESULT__"
MISSING_FUNCTION_EXIT = 87

# Runs inside the child interpreter: argv = [path, func_name], stdin = repr(args)
_HARNESS = f"""
import ast, base64, importlib.util, json, os, pickle, sys
path, func_name = sys.argv[1], sys.argv[2]
sys.path.insert(0, os.path.dirname(os.path.abspath(path)))
spec = importlib.util.spec_from_file_location("_casegen_impl", path)
module = importlib.util.module_from_spec(spec)
spec.loader.exec_module(module)
func = getattr(module, func_name, None)
if not callable(func):
    sys.exit({MISSING_FUNCTION_EXIT})
args = ast.literal_eval(sys.stdin.read())
result = func(*args)

def describe(value):
    if type(value).__repr__ is object.__repr__ and hasattr(value, "__dict__"):
        return type(value).__qualname__ + "(" + repr(sorted(vars(value).items())) + ")"
    return repr(value)

try:
    pickled = base64.b64encode(pickle.dumps(result)).decode("ascii")
except Exception:
    pickled = None
payload = json.dumps({{"pickle": pickled, "repr": describe(result)}})
sys.stdout.write("\\n{RESULT_MARKER}" + payload + "\\n")
"""

_ADDRESS = re.compile(r"\s+at\s+0x[0-9a-fA-F]+")

# Globals a result pickle may reference; anything else falls back to ReprResult
_SAFE_GLOBALS = {
    "builtins": {"bool", "bytearray", "bytes", "complex", "dict", "float", "frozenset",
                 "int", "list", "range", "set", "slice", "str", "tuple"},
    "collections": {"Counter", "OrderedDict", "defaultdict", "deque"},
    "datetime": {"date", "datetime", "time", "timedelta", "timezone"},
    "decimal": {"Decimal"},
    "fractions": {"Fraction"},
}


@dataclass(frozen=True)
class ReprResult:
    """An output the parent could not rebuild, identified by its description."""
    text: str

    def __repr__(self) -> str:
        return self.text


class _DataUnpickler(pickle.Unpickler):
    """Unpickler restricted to plain data types."""

    def find_class(self, module, name):
        if name in _SAFE_GLOBALS.get(module, ()):
            return super().find_class(module, name)
        raise pickle.UnpicklingError(f"global '{module}.{name}' is not allowed")


def normalize_repr(text: str) -> str:
    """Strip memory addresses, which differ between interpreter processes."""
    return _ADDRESS.sub("", text)


def _tail(text: str, limit: int = 500) -> str:
    text = (text or "").strip()
    return text if len(text) <= limit else "..." + text[-limit:]


def parse_output(stdout: str) -> Any:
    """Recover the return value from the harness output.

    Raises:
        ValueError: If the output carries no well-formed result line
    """
    for line in reversed(stdout.splitlines()):
        if not line.startswith(RESULT_MARKER):
            continue
        try:
            payload = json.loads(line[len(RESULT_MARKER):])
            pickled, text = payload["pickle"], payload["repr"]
        except (ValueError, KeyError, TypeError) as exc:
            raise ValueError(f"malformed result line: {exc}") from exc

        if pickled is not None:
            try:
                return _DataUnpickler(io.BytesIO(base64.b64decode(pickled))).load()
            except (pickle.UnpicklingError, ValueError, EOFError):
                # Types outside the safe set are compared by description
                pass
        return ReprResult(normalize_repr(str(text)))
    raise ValueError("implementation produced no result")


class Runner(ABC):
    """Runs one implementation of the function under test."""

    identifier: str

    @abstractmethod
    def __call__(self, args: Sequence[Any]) -> Any:
        """Return the implementation's output on args or raise ExecutionFailure."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r})"


class SubprocessRunner(Runner):
    """Runs a function defined in a Python file in a child interpreter."""

    def __init__(
        self,
        path,
        func_name: str,
        *,
        timeout: float = config.DEFAULT_TIMEOUT_SECONDS,
        python: str = config.DEFAULT_PYTHON,
        identifier: Optional[str] = None,
    ):
        self.path = Path(path).resolve()
        self.func_name = func_name
        self.timeout = timeout
        self.python = python
        self.identifier = identifier or self.path.name

    def __call__(self, args: Sequence[Any]) -> Any:
        try:
            completed = subprocess.run(
                [self.python, "-c", _HARNESS, str(self.path), self.func_name],
                input=repr(tuple(args)),
                cwd=str(self.path.parent),
                capture_output=True,
                text=True,
                timeout=self.timeout,
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.TimeoutExpired:
            raise timeout_failure(self.identifier, self.timeout)
        except OSError as exc:
            raise exception_failure(self.identifier, exc) from exc

        if completed.returncode == MISSING_FUNCTION_EXIT:
            raise ExecutionFailure(
                ExecutionFailureType.MISSING_FUNCTION,
                self.identifier,
                f"{self.path.name} does not define {self.func_name}()",
            )
        if completed.returncode != 0:
            raise ExecutionFailure(
                ExecutionFailureType.NONZERO_EXIT,
                self.identifier,
                f"exit code {completed.returncode}: {_tail(completed.stderr)}",
            )

        try:
            return parse_output(completed.stdout)
        except ValueError as exc:
            raise ExecutionFailure(ExecutionFailureType.EXCEPTION, self.identifier, str(exc)) from exc


class CallableRunner(Runner):
    """Runs an in-process Python callable.

    In-process calls cannot be preempted; the oracle still stops waiting for
    them after its timeout.
    """

    def __init__(self, func: Callable[..., Any], identifier: Optional[str] = None):
        self.func = func
        self.identifier = identifier or getattr(func, "__name__", "callable")

    def __call__(self, args: Sequence[Any]) -> Any:
        try:
            return self.func(*args)
        except Exception as exc:
            raise exception_failure(self.identifier, exc) from exc


def discover_candidates(
    directory,
    func_name: str,
    *,
    timeout: float = config.DEFAULT_TIMEOUT_SECONDS,
    python: str = config.DEFAULT_PYTHON,
) -> Dict[str, SubprocessRunner]:
    """Build one runner per ``*.py`` file in directory, keyed by file name.

    Raises:
        NotADirectoryError: If directory does not exist or is not a directory
    """
    root = Path(directory)
    if not root.is_dir():
        raise NotADirectoryError(f"Candidate directory not found: {directory}")

    runners: Dict[str, SubprocessRunner] = {}
    for path in sorted(root.glob("*.py")):
        if path.name == "__init__.py" or not path.is_file():
            continue
        runners[path.name] = SubprocessRunner(path, func_name, timeout=timeout, python=python)
    return runners
