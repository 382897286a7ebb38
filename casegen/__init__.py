#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""casegen - concise test set generation for Python functions."""

from casegen.versioning import get_version

__version__ = get_version()

# Errors
from casegen.errors import (
    CaseGenError,
    InvalidConfigError,
    GenerationError,
    ExecutionFailure,
    ExecutionFailureType,
    SetupFailure,
)

# Models
from casegen.models import TestCase, freeze

# Domain nodes
from casegen.nodes import (
    NodeKind,
    PyNode,
    IntNode,
    FloatNode,
    BoolNode,
    StrNode,
    ListNode,
    TupleNode,
    SetNode,
    DictNode,
)

# Pipeline
from casegen.generation import BaseSetGenerator, assemble
from casegen.execution import (
    Oracle,
    OracleReport,
    SubprocessRunner,
    CallableRunner,
    discover_candidates,
    evaluate,
)
from casegen.minimization import minimize
from casegen.parse import ConfigFile, ConfigFileParser

__all__ = [
    "__version__",
    "CaseGenError",
    "InvalidConfigError",
    "GenerationError",
    "ExecutionFailure",
    "ExecutionFailureType",
    "SetupFailure",
    "TestCase",
    "freeze",
    "NodeKind",
    "PyNode",
    "IntNode",
    "FloatNode",
    "BoolNode",
    "StrNode",
    "ListNode",
    "TupleNode",
    "SetNode",
    "DictNode",
    "BaseSetGenerator",
    "assemble",
    "Oracle",
    "OracleReport",
    "SubprocessRunner",
    "CallableRunner",
    "discover_candidates",
    "evaluate",
    "minimize",
    "ConfigFile",
    "ConfigFileParser",
]
