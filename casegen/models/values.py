#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Canonical identity for generated Python values.

Generated lists, sets and dicts are unhashable, but test cases and exhaustive
value sets need set semantics. freeze() maps any generated value to a hashable
key that is equal exactly when the two values are equal and of the same kind,
so [1] and (1,) stay distinct and {0, 1} equals {1, 0}.
"""

from typing import Any, Hashable


def freeze(value: Any) -> Hashable:
    """Return the canonical hashable key of a generated value."""
    if isinstance(value, list):
        return ("list", tuple(freeze(item) for item in value))
    if isinstance(value, tuple):
        return ("tuple", tuple(freeze(item) for item in value))
    if isinstance(value, (set, frozenset)):
        return ("set", frozenset(freeze(item) for item in value))
    if isinstance(value, dict):
        return ("dict", frozenset((freeze(k), freeze(v)) for k, v in value.items()))
    return (type(value).__name__, value)


def unique(values):
    """Yield values in order, skipping any whose frozen key was already seen."""
    seen = set()
    for value in values:
        key = freeze(value)
        if key in seen:
            continue
        seen.add(key)
        yield value
