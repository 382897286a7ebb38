#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Domain nodes: exhaustive and random generation of Python values."""

from casegen.nodes.base import NodeKind, PyNode, SizedNode, set_max_retries, walk
from casegen.nodes.scalars import BoolNode, FloatNode, IntNode, ScalarNode
from casegen.nodes.strings import StrNode
from casegen.nodes.iterables import IterableNode, ListNode, SetNode, TupleNode
from casegen.nodes.mapping import DictNode

__all__ = [
    "NodeKind",
    "PyNode",
    "SizedNode",
    "ScalarNode",
    "IntNode",
    "FloatNode",
    "BoolNode",
    "StrNode",
    "IterableNode",
    "ListNode",
    "TupleNode",
    "SetNode",
    "DictNode",
    "walk",
    "set_max_retries",
]
