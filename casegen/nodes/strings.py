#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""String domain node."""

import itertools
import random
from typing import Iterator

from casegen.errors import InvalidConfigError
from casegen.nodes.base import NodeKind, SizedNode


class StrNode(SizedNode):
    """Generates strings over a character domain; the domains are string lengths."""

    kind = NodeKind.STR

    def __init__(self, char_domain: str):
        super().__init__()
        # Repeated characters collapse; order of first appearance is kept
        chars = "".join(dict.fromkeys(char_domain))
        if not chars:
            raise InvalidConfigError("No char domain for str")
        self._char_domain = chars

    @property
    def char_domain(self) -> str:
        return self._char_domain

    @property
    def is_hashable(self) -> bool:
        return True

    def iter_exhaustive(self) -> Iterator[str]:
        for length in self._require_exhaustive_domain():
            for chars in itertools.product(self._char_domain, repeat=length):
                yield "".join(chars)

    def sample(self, rng: random.Random) -> str:
        length = rng.choice(self._require_random_domain())
        return "".join(rng.choice(self._char_domain) for _ in range(length))

    def type_string(self) -> str:
        return f"str({self._char_domain})"
