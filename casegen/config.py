#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Configuration constants and settings for casegen."""

import os
import pathlib
import sys
from dataclasses import dataclass
from typing import Optional

# Configuration
ROOT = pathlib.Path(os.getcwd()).resolve()
CASEGEN_DIR = ROOT / ".casegen"
LOGS_DIR = CASEGEN_DIR / "logs"

# ============================================================================
# Oracle execution
# ============================================================================
# Seconds allowed for a single (implementation, test case) invocation
DEFAULT_TIMEOUT_SECONDS = float(os.getenv("CASEGEN_TIMEOUT", "10"))

# Worker threads used to evaluate (test case x implementation) pairs
DEFAULT_MAX_WORKERS = int(os.getenv("CASEGEN_WORKERS", str(min(32, (os.cpu_count() or 1) + 4))))

# Interpreter used to run reference and candidate implementations
DEFAULT_PYTHON = os.getenv("CASEGEN_PYTHON", sys.executable)

# ============================================================================
# Generation
# ============================================================================
# Collision retries allowed per missing element when sampling sets and dicts
DEFAULT_MAX_RETRIES = int(os.getenv("CASEGEN_MAX_RETRIES", "100"))

_seed_env = os.getenv("CASEGEN_SEED", "").strip()
DEFAULT_SEED: Optional[int] = int(_seed_env) if _seed_env else None

# Log retention (number of debug log files kept)
LOG_RETENTION_LIMIT_DEFAULT = int(os.getenv("CASEGEN_LOG_RETENTION", "7"))
LOG_RETENTION_LIMIT = LOG_RETENTION_LIMIT_DEFAULT


@dataclass
class RunSettings:
    """Settings for one generate-evaluate-minimize run."""
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    max_workers: int = DEFAULT_MAX_WORKERS
    seed: Optional[int] = DEFAULT_SEED
    max_retries: int = DEFAULT_MAX_RETRIES
    python: str = DEFAULT_PYTHON

    @classmethod
    def from_env(cls) -> "RunSettings":
        """Create settings from environment variables."""
        seed = os.getenv("CASEGEN_SEED", "").strip()
        return cls(
            timeout=float(os.getenv("CASEGEN_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))),
            max_workers=int(os.getenv("CASEGEN_WORKERS", str(DEFAULT_MAX_WORKERS))),
            seed=int(seed) if seed else None,
            max_retries=int(os.getenv("CASEGEN_MAX_RETRIES", str(DEFAULT_MAX_RETRIES))),
            python=os.getenv("CASEGEN_PYTHON", DEFAULT_PYTHON),
        )

    def validate(self) -> None:
        """Reject settings the oracle and generators cannot run with."""
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be non-negative, got {self.max_retries}")
