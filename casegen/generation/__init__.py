#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Base test set generation."""

from casegen.generation.base_set import BaseSetGenerator, assemble

__all__ = [
    "BaseSetGenerator",
    "assemble",
]
