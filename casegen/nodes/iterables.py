#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""List, tuple and set domain nodes.

Each owns a single element node. The domains are container lengths; the
element values come from the child's own domains.
"""

import itertools
import random
from typing import Any, Iterator, List, Set, Tuple

from casegen.debug_logger import get_logger
from casegen.errors import InvalidConfigError
from casegen.nodes.base import NodeKind, PyNode, SizedNode


class IterableNode(SizedNode):
    """Shared behaviour for nodes with exactly one element child."""

    def __init__(self, child: PyNode):
        if child is None:
            raise InvalidConfigError(f"{self.kind.value} node requires an element type")
        super().__init__(left_child=child)

    def type_string(self) -> str:
        return f"{self.kind.value}({self._left_child.type_string()})"


class ListNode(IterableNode):
    kind = NodeKind.LIST

    def iter_exhaustive(self) -> Iterator[List[Any]]:
        lengths = self._require_exhaustive_domain()
        elements = self._left_child.exhaustive_values()
        for length in lengths:
            for combo in itertools.product(elements, repeat=length):
                yield list(combo)

    def sample(self, rng: random.Random) -> List[Any]:
        length = rng.choice(self._require_random_domain())
        return [self._left_child.sample(rng) for _ in range(length)]


class TupleNode(IterableNode):
    kind = NodeKind.TUPLE

    @property
    def is_hashable(self) -> bool:
        return self._left_child.is_hashable

    def iter_exhaustive(self) -> Iterator[Tuple[Any, ...]]:
        lengths = self._require_exhaustive_domain()
        elements = self._left_child.exhaustive_values()
        for length in lengths:
            yield from itertools.product(elements, repeat=length)

    def sample(self, rng: random.Random) -> Tuple[Any, ...]:
        length = rng.choice(self._require_random_domain())
        return tuple(self._left_child.sample(rng) for _ in range(length))


class SetNode(IterableNode):
    """Sets of a given length drawn from the child's values.

    Exhaustively, a length-n draw that repeats an element collapses to a
    smaller set, exactly as building a Python set from the draw would. When
    sampling, collisions are redrawn until the set reaches the sampled size or
    ``max_retries`` consecutive draws collide; the set is then returned short.
    """

    kind = NodeKind.SET

    def __init__(self, child: PyNode):
        super().__init__(child)
        if not child.is_hashable:
            raise InvalidConfigError(f"set elements must be hashable, got {child.type_string()}")

    def iter_exhaustive(self) -> Iterator[Set[Any]]:
        lengths = self._require_exhaustive_domain()
        elements = self._left_child.exhaustive_values()
        for length in lengths:
            # Order is irrelevant to a set, so multisets suffice
            for combo in itertools.combinations_with_replacement(elements, length):
                yield set(combo)

    def sample(self, rng: random.Random) -> Set[Any]:
        length = rng.choice(self._require_random_domain())
        result: Set[Any] = set()
        collisions = 0
        while len(result) < length:
            element = self._left_child.sample(rng)
            if element in result:
                collisions += 1
                if collisions > self.max_retries:
                    get_logger().log("nodes", "SET_RETRY_EXHAUSTED", {
                        "node": self.type_string(),
                        "target_size": length,
                        "actual_size": len(result),
                    }, "DEBUG")
                    break
                continue
            result.add(element)
            collisions = 0
        return result
