#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Set-cover minimization of kill sets."""

from casegen.minimization.set_cover import coverage_universe, minimize

__all__ = [
    "coverage_universe",
    "minimize",
]
