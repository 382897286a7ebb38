#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Parsed configuration for one function under test."""

from dataclasses import dataclass
from typing import List

from casegen.nodes.base import PyNode


@dataclass
class ConfigFile:
    """The function name, one domain node per parameter, and the random test quota."""
    func_name: str
    nodes: List[PyNode]
    num_random: int

    def __repr__(self) -> str:
        params = ", ".join(node.type_string() for node in self.nodes)
        return f"ConfigFile({self.func_name}({params}), num_random={self.num_random})"
