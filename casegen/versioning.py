#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Version helpers for casegen."""

from __future__ import annotations

import platform
import subprocess
from pathlib import Path
from typing import Optional

from casegen._version import CASEGEN_VERSION, CASEGEN_GIT_COMMIT


def get_version() -> str:
    """Return the package version using the single source of truth."""

    if CASEGEN_VERSION:
        return CASEGEN_VERSION

    try:
        from importlib.metadata import version  # type: ignore

        return version("casegen")
    except Exception:
        return "unknown"


def get_git_commit(short: bool = True) -> Optional[str]:
    """Return the git commit hash, preferring the build-time value if present."""
    if CASEGEN_GIT_COMMIT and CASEGEN_GIT_COMMIT != "unknown":
        return CASEGEN_GIT_COMMIT[:7] if short else CASEGEN_GIT_COMMIT

    try:
        repo_root = Path(__file__).resolve().parent.parent
        if short:
            cmd = ["git", "rev-parse", "--short", "HEAD"]
        else:
            cmd = ["git", "rev-parse", "HEAD"]
        commit = subprocess.check_output(cmd, cwd=repo_root, stderr=subprocess.DEVNULL)
        return commit.decode().strip()
    except (OSError, subprocess.CalledProcessError):
        return None


def build_version_output() -> str:
    """Format detailed version information for display."""

    version = get_version()
    commit = get_git_commit(short=True)

    output = ["casegen - Concise Test Set Generator"]
    output.append("=" * 60)
    if commit:
        output.append(f"  Version:          {version} (commit {commit})")
    else:
        output.append(f"  Version:          {version}")
    output.append(f"  Python:           {platform.python_version()}")
    output.append(f"  Platform:         {platform.system()} {platform.release()}")

    return "\n".join(output)
