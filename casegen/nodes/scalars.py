#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Scalar domain nodes: int, float and bool."""

import random
from abc import abstractmethod
from numbers import Real
from typing import Any, Iterator

from casegen.errors import InvalidConfigError
from casegen.nodes.base import NodeKind, PyNode


class ScalarNode(PyNode):
    """A node whose domains are the literal values it generates."""

    @property
    def is_hashable(self) -> bool:
        return True

    @abstractmethod
    def _cast(self, value: Real) -> Any:
        """Convert a domain value to the generated type."""

    def iter_exhaustive(self) -> Iterator[Any]:
        for value in self._require_exhaustive_domain():
            yield self._cast(value)

    def sample(self, rng: random.Random) -> Any:
        return self._cast(rng.choice(self._require_random_domain()))

    def type_string(self) -> str:
        return self.kind.value


class IntNode(ScalarNode):
    kind = NodeKind.INT

    def _validate_domain_value(self, value: Real, which: str) -> None:
        if value != int(value):
            raise InvalidConfigError(f"{value!r} in {which} domain for int is not an integer")

    def _cast(self, value: Real) -> int:
        return int(value)


class FloatNode(ScalarNode):
    kind = NodeKind.FLOAT

    def _validate_domain_value(self, value: Real, which: str) -> None:
        # Any real number is a legal float value
        return None

    def _cast(self, value: Real) -> float:
        return float(value)


class BoolNode(ScalarNode):
    """Generates False/True from domains restricted to 0 and 1."""

    kind = NodeKind.BOOL

    def _validate_domain_value(self, value: Real, which: str) -> None:
        if value not in (0, 1):
            raise InvalidConfigError(f"{value!r} in {which} domain for bool is not 0 or 1")

    def _cast(self, value: Real) -> bool:
        return bool(value)
