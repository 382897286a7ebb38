#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Running implementations and deriving kill sets."""

from casegen.execution.runners import (
    Runner,
    SubprocessRunner,
    CallableRunner,
    ReprResult,
    discover_candidates,
    parse_output,
)
from casegen.execution.oracle import (
    Oracle,
    OracleReport,
    InvocationResult,
    KillSetMap,
    evaluate,
)

__all__ = [
    "Runner",
    "SubprocessRunner",
    "CallableRunner",
    "ReprResult",
    "discover_candidates",
    "parse_output",
    "Oracle",
    "OracleReport",
    "InvocationResult",
    "KillSetMap",
    "evaluate",
]
