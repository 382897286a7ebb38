#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Domain node base class.

A domain node describes how to generate values of one Python type. Every node
carries two domains:
- an exhaustive domain, enumerated in full by exhaustive_values();
- a random domain, sampled uniformly by sample().

For int, float and bool nodes the domains hold literal values. For every
other node they hold sizes: string lengths, container lengths or dict entry
counts. Compound nodes own one child (list, tuple, set) or two (dict key and
value) describing their elements.
"""

import math
import random
from abc import ABC, abstractmethod
from enum import Enum
from numbers import Real
from typing import Any, Iterator, List, Optional, Sequence

from casegen import config
from casegen.errors import GenerationError, InvalidConfigError
from casegen.models.values import unique


class NodeKind(Enum):
    """Discriminant for the node variants."""
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STR = "str"
    LIST = "list"
    TUPLE = "tuple"
    SET = "set"
    DICT = "dict"

    @property
    def arity(self) -> int:
        """Number of child nodes a node of this kind owns."""
        if self is NodeKind.DICT:
            return 2
        if self in {NodeKind.LIST, NodeKind.TUPLE, NodeKind.SET}:
            return 1
        return 0


class PyNode(ABC):
    """Base class for all domain nodes."""

    kind: NodeKind

    def __init__(self, left_child: Optional["PyNode"] = None, right_child: Optional["PyNode"] = None):
        self._left_child = left_child
        self._right_child = right_child
        self._exhaustive_domain: Optional[List[Any]] = None
        self._random_domain: Optional[List[Any]] = None
        self.max_retries = config.DEFAULT_MAX_RETRIES

    @property
    def arity(self) -> int:
        return self.kind.arity

    @property
    def left_child(self) -> Optional["PyNode"]:
        """The element node (list, tuple, set) or key node (dict)."""
        return self._left_child

    @property
    def right_child(self) -> Optional["PyNode"]:
        """The value node of a dict node."""
        return self._right_child

    @property
    def children(self) -> List["PyNode"]:
        return [child for child in (self._left_child, self._right_child) if child is not None]

    @property
    def is_hashable(self) -> bool:
        """Whether generated values can be set elements or dict keys."""
        return False

    @property
    def exhaustive_domain(self) -> Optional[List[Any]]:
        return None if self._exhaustive_domain is None else list(self._exhaustive_domain)

    @property
    def random_domain(self) -> Optional[List[Any]]:
        return None if self._random_domain is None else list(self._random_domain)

    def set_exhaustive_domain(self, domain: Sequence[Any]) -> None:
        """Attach the exhaustive domain after checking it is legal for this node."""
        self._exhaustive_domain = self._checked_domain(domain, "exhaustive")

    def set_random_domain(self, domain: Sequence[Any]) -> None:
        """Attach the random domain after checking it is legal for this node."""
        self._random_domain = self._checked_domain(domain, "random")

    def _checked_domain(self, domain: Sequence[Any], which: str) -> List[Any]:
        values = list(domain)
        if not values:
            raise InvalidConfigError(f"Empty {which} domain for {self.type_string()}")
        for value in values:
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidConfigError(
                    f"{which.capitalize()} domain value {value!r} for {self.type_string()} is not a number"
                )
            if not math.isfinite(value):
                raise InvalidConfigError(
                    f"{which.capitalize()} domain value {value!r} for {self.type_string()} is not finite"
                )
            self._validate_domain_value(value, which)
        return values

    @abstractmethod
    def _validate_domain_value(self, value: Real, which: str) -> None:
        """Raise InvalidConfigError if value is illegal in this node's domains."""

    def _require_exhaustive_domain(self) -> List[Any]:
        if not self._exhaustive_domain:
            raise GenerationError(f"No exhaustive domain set for {self.type_string()}")
        return self._exhaustive_domain

    def _require_random_domain(self) -> List[Any]:
        if not self._random_domain:
            raise GenerationError(f"No random domain set for {self.type_string()}")
        return self._random_domain

    def exhaustive_values(self) -> List[Any]:
        """Every value described by the exhaustive domain, without duplicates.

        The order is deterministic: domain order first, then the order of the
        underlying Cartesian products.
        """
        return list(unique(self.iter_exhaustive()))

    @abstractmethod
    def iter_exhaustive(self) -> Iterator[Any]:
        """Stream the exhaustive values; may repeat values (see exhaustive_values)."""

    @abstractmethod
    def sample(self, rng: random.Random) -> Any:
        """Draw one value following the random domain."""

    @abstractmethod
    def type_string(self) -> str:
        """The type in config-file syntax, e.g. ``list(int)``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.type_string()})"


def walk(node: PyNode) -> Iterator[PyNode]:
    """Yield node and all of its descendants, depth first."""
    yield node
    for child in node.children:
        yield from walk(child)


def set_max_retries(nodes: Sequence[PyNode], max_retries: int) -> None:
    """Apply a collision retry bound to every node in the given trees."""
    for root in nodes:
        for node in walk(root):
            node.max_retries = max_retries


class SizedNode(PyNode):
    """A node whose domains are sizes: string lengths, container lengths or entry counts."""

    def _validate_domain_value(self, value: Real, which: str) -> None:
        if value != int(value) or value < 0:
            raise InvalidConfigError(
                f"{value!r} in {which} domain for {self.type_string()} is not a non-negative integer"
            )

    def _checked_domain(self, domain: Sequence[Any], which: str) -> List[Any]:
        return [int(value) for value in super()._checked_domain(domain, which)]
