#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base Test Set Generator.

Turns one domain node per parameter into concrete test cases: the Cartesian
product of every parameter's exhaustive values, followed by a fixed number of
independently sampled random tuples. No de-duplication happens here; a random
tuple may repeat an exhaustive one or another random one.
"""

import itertools
import random
from typing import Iterator, List, Optional, Sequence

from casegen.debug_logger import get_logger
from casegen.models.test_case import TestCase
from casegen.nodes.base import PyNode


class BaseSetGenerator:
    """Assembles the base test set from per-parameter domain nodes."""

    def __init__(self, nodes: Sequence[PyNode], num_random: int, rng: Optional[random.Random] = None):
        """Create a generator.

        Args:
            nodes: One domain node per parameter, in parameter order
            num_random: Number of random test cases to add
            rng: Random source shared by every sample() call of the run
        """
        if num_random < 0:
            raise ValueError(f"num_random must be non-negative, got {num_random}")
        self.nodes = list(nodes)
        self.num_random = num_random
        self.rng = rng if rng is not None else random.Random()

    def iter_exhaustive_tests(self) -> Iterator[TestCase]:
        """Stream the Cartesian product of all parameters' exhaustive values."""
        value_sets = [node.exhaustive_values() for node in self.nodes]
        # An empty value set empties the whole product
        for combo in itertools.product(*value_sets):
            yield TestCase(combo)

    def gen_exhaustive_tests(self) -> List[TestCase]:
        """Return every exhaustive test case, in product order."""
        return list(self.iter_exhaustive_tests())

    def gen_random_tests(self) -> List[TestCase]:
        """Return num_random test cases, each sampling every parameter once in order."""
        return [
            TestCase(node.sample(self.rng) for node in self.nodes)
            for _ in range(self.num_random)
        ]

    def gen_base_set(self) -> List[TestCase]:
        """Return the exhaustive test cases followed by the random ones."""
        exhaustive = self.gen_exhaustive_tests()
        randoms = self.gen_random_tests()

        get_logger().log("generation", "BASE_SET_ASSEMBLED", {
            "parameters": [node.type_string() for node in self.nodes],
            "exhaustive": len(exhaustive),
            "random": len(randoms),
        })
        return exhaustive + randoms


def assemble(nodes: Sequence[PyNode], num_random: int, rng: Optional[random.Random] = None) -> List[TestCase]:
    """Build the base test set for the given parameter nodes."""
    return BaseSetGenerator(nodes, num_random, rng).gen_base_set()
