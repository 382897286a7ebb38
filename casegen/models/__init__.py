#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Test case and value models for casegen."""

from casegen.models.test_case import TestCase
from casegen.models.values import freeze, unique

__all__ = [
    "TestCase",
    "freeze",
    "unique",
]
