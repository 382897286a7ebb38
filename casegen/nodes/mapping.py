#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Dict domain node."""

import itertools
import random
from typing import Any, Dict, Iterator

from casegen.debug_logger import get_logger
from casegen.errors import InvalidConfigError
from casegen.nodes.base import NodeKind, PyNode, SizedNode


class DictNode(SizedNode):
    """Dicts built from a key node and a value node; the domains are entry counts.

    Exhaustively, a dict of n entries pairs every choice of n distinct keys
    with every assignment of values to them. Counts larger than the number of
    distinct keys are infeasible and produce nothing.
    """

    kind = NodeKind.DICT

    def __init__(self, key_node: PyNode, value_node: PyNode):
        if key_node is None or value_node is None:
            raise InvalidConfigError("dict node requires a key type and a value type")
        if not key_node.is_hashable:
            raise InvalidConfigError(f"dict keys must be hashable, got {key_node.type_string()}")
        super().__init__(left_child=key_node, right_child=value_node)

    def iter_exhaustive(self) -> Iterator[Dict[Any, Any]]:
        counts = self._require_exhaustive_domain()
        keys = self._left_child.exhaustive_values()
        values = self._right_child.exhaustive_values()
        for count in counts:
            if count > len(keys):
                continue
            for key_combo in itertools.combinations(keys, count):
                for value_combo in itertools.product(values, repeat=count):
                    yield dict(zip(key_combo, value_combo))

    def sample(self, rng: random.Random) -> Dict[Any, Any]:
        count = rng.choice(self._require_random_domain())
        result: Dict[Any, Any] = {}
        collisions = 0
        while len(result) < count:
            key = self._left_child.sample(rng)
            if key in result:
                collisions += 1
                if collisions > self.max_retries:
                    get_logger().log("nodes", "DICT_RETRY_EXHAUSTED", {
                        "node": self.type_string(),
                        "target_size": count,
                        "actual_size": len(result),
                    }, "DEBUG")
                    break
                continue
            result[key] = self._right_child.sample(rng)
            collisions = 0
        return result

    def type_string(self) -> str:
        return f"dict({self._left_child.type_string()}:{self._right_child.type_string()})"
