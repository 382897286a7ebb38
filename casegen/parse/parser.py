#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration file parser.

A configuration file is a JSON object (or a YAML mapping, for ``.yaml`` and
``.yml`` files) with five fields::

    {
        "fname": "func",
        "types": ["int", "list(str(ab))", "dict(int:bool)"],
        "exhaustive domain": ["0~2", "[0, 2](1~2)", "[1](0~1:[0,1])"],
        "random domain": ["-10~10", "0~5(0~3)", "0~3(0~9:0~1)"],
        "num random": 100
    }

Types nest with parentheses. Domains nest the same way: the part before the
parenthesis is the node's own domain (values for int, float and bool; sizes
for everything else) and the parenthesised part is the child's domain. A
domain level is either an inclusive integer range ``lo~hi`` or an explicit
list ``[a, b, c]``.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from casegen.errors import InvalidConfigError
from casegen.nodes import (
    BoolNode,
    DictNode,
    FloatNode,
    IntNode,
    ListNode,
    NodeKind,
    PyNode,
    SetNode,
    StrNode,
    TupleNode,
)
from casegen.parse.config_file import ConfigFile

FNAME = "fname"
TYPES = "types"
EXHAUSTIVE_DOMAIN = "exhaustive domain"
RANDOM_DOMAIN = "random domain"
NUM_RANDOM = "num random"

REQUIRED_FIELDS = (FNAME, TYPES, EXHAUSTIVE_DOMAIN, RANDOM_DOMAIN, NUM_RANDOM)
ARRAY_FIELDS = (TYPES, EXHAUSTIVE_DOMAIN, RANDOM_DOMAIN)
YAML_SUFFIXES = {".yaml", ".yml"}

_SIMPLE_TYPES = {"int": IntNode, "float": FloatNode, "bool": BoolNode}
_ITERABLE_TYPES = {"list": ListNode, "tuple": TupleNode, "set": SetNode}


def _inner(text: str, paren_idx: int) -> str:
    """Text after the opening parenthesis at paren_idx.

    The closing parenthesis is optional: ``list(int)`` and ``list(int`` are
    the same type. When the parentheses balance, the last one closes the
    opening one and is dropped.
    """
    rest = text[paren_idx + 1:]
    if text.endswith(")") and text.count("(") == text.count(")"):
        rest = rest[:-1]
    return rest.strip()


class ConfigFileParser:
    """Reads configuration files and builds the parameter node trees."""

    def read_file(self, filepath) -> str:
        """Return the contents of the file at filepath.

        Raises:
            OSError: If the file does not exist or cannot be read
        """
        return Path(filepath).read_text(encoding="utf-8")

    def parse_file(self, filepath) -> ConfigFile:
        """Read and parse a configuration file, choosing YAML by file suffix."""
        fmt = "yaml" if Path(filepath).suffix.lower() in YAML_SUFFIXES else "json"
        return self.parse(self.read_file(filepath), fmt=fmt)

    def parse(self, contents: str, fmt: str = "json") -> ConfigFile:
        """Parse configuration text into a ConfigFile.

        Args:
            contents: The configuration text
            fmt: "json" or "yaml"

        Returns:
            ConfigFile whose nodes carry both of their domains

        Raises:
            InvalidConfigError: If the text is malformed in any way
        """
        data = self._load(contents, fmt)

        for name in REQUIRED_FIELDS:
            if name not in data:
                raise InvalidConfigError(f"Missing {name} field")
        for name in ARRAY_FIELDS:
            if not isinstance(data[name], list):
                raise InvalidConfigError(f"{name} value isn't an array")

        nodes = self.parse_types(data[TYPES])
        self.parse_domains(data[EXHAUSTIVE_DOMAIN], nodes, exhaustive=True)
        self.parse_domains(data[RANDOM_DOMAIN], nodes, exhaustive=False)

        func_name = data[FNAME]
        if not isinstance(func_name, str) or not func_name.strip():
            raise InvalidConfigError("fname value isn't a string")

        num_random = data[NUM_RANDOM]
        if isinstance(num_random, bool) or not isinstance(num_random, int):
            raise InvalidConfigError("num random value isn't an integer")
        if num_random < 0:
            raise InvalidConfigError(f"num random value {num_random} is negative")

        return ConfigFile(func_name=func_name.strip(), nodes=nodes, num_random=num_random)

    def _load(self, contents: str, fmt: str) -> Dict[str, Any]:
        if fmt == "yaml":
            try:
                data = yaml.safe_load(contents)
            except yaml.YAMLError as exc:
                raise InvalidConfigError(f"Invalid YAML: {exc}") from exc
        elif fmt == "json":
            try:
                data = json.loads(contents)
            except json.JSONDecodeError as exc:
                raise InvalidConfigError(f"Invalid JSON: {exc}") from exc
        else:
            raise ValueError(f"Unsupported config format: {fmt}")

        if not isinstance(data, dict):
            raise InvalidConfigError("Configuration must be an object")
        return data

    def parse_types(self, types: Sequence[Any]) -> List[PyNode]:
        """Build one node per type string."""
        nodes = []
        for type_str in types:
            if not isinstance(type_str, str):
                raise InvalidConfigError(f"Type {type_str!r} isn't a string")
            nodes.append(self.parse_type(type_str))
        return nodes

    def parse_type(self, type_str: str) -> PyNode:
        """Build the node tree for a single type string such as ``dict(int:list(bool))``."""
        text = type_str.strip()
        if text in _SIMPLE_TYPES:
            return _SIMPLE_TYPES[text]()

        paren_idx = text.find("(")
        head = (text if paren_idx == -1 else text[:paren_idx]).strip()
        if head != "str" and head != "dict" and head not in _ITERABLE_TYPES:
            raise InvalidConfigError(f"Invalid syntax for {text}")
        if paren_idx == -1:
            raise InvalidConfigError(f"Missing parenthesis in {text}")

        inner = _inner(text, paren_idx)
        if not inner:
            if head == "str":
                raise InvalidConfigError(f"No char domain for {text}")
            raise InvalidConfigError(f"No further types specified in {text}")

        if head == "str":
            return StrNode(inner)
        if head in _ITERABLE_TYPES:
            return _ITERABLE_TYPES[head](self.parse_type(inner))

        colon_idx = inner.find(":")
        if colon_idx == -1:
            raise InvalidConfigError(f"Missing colon in {text}")
        key = self.parse_type(inner[:colon_idx])
        value = self.parse_type(inner[colon_idx + 1:])
        return DictNode(key, value)

    def parse_domains(self, domains: Sequence[Any], nodes: Sequence[PyNode], exhaustive: bool) -> None:
        """Attach one domain string to each node, exhaustive or random."""
        if len(domains) != len(nodes):
            raise InvalidConfigError(f"Need {len(nodes)} domains but found {len(domains)}")
        for domain, node in zip(domains, nodes):
            if not isinstance(domain, str):
                raise InvalidConfigError(f"Domain {domain!r} isn't a string")
            self.parse_domain(domain, node, exhaustive)

    def parse_domain(self, domain: str, node: PyNode, exhaustive: bool) -> None:
        """Attach domain to node and, recursively, its children's domains to them."""
        text = domain.strip()
        paren_idx = text.find("(")

        if node.arity > 0:
            if paren_idx == -1:
                raise InvalidConfigError(f"Missing parenthesis in {text}")
            inner = _inner(text, paren_idx)
            if node.kind is NodeKind.DICT:
                colon_idx = inner.find(":")
                if colon_idx == -1:
                    raise InvalidConfigError(f"Missing colon in {text}")
                self.parse_domain(inner[:colon_idx], node.left_child, exhaustive)
                self.parse_domain(inner[colon_idx + 1:], node.right_child, exhaustive)
            else:
                self.parse_domain(inner, node.left_child, exhaustive)
            own = text[:paren_idx].strip()
        else:
            if paren_idx > -1:
                raise InvalidConfigError(f'"(" unexpected in {text}')
            if ":" in text:
                raise InvalidConfigError(f'":" unexpected in {text}')
            own = text

        values = self._parse_level(own, text, node)
        try:
            if exhaustive:
                node.set_exhaustive_domain(values)
            else:
                node.set_random_domain(values)
        except InvalidConfigError as exc:
            raise InvalidConfigError(f"Domain {text} is invalid: {exc}") from exc

    def _parse_level(self, own: str, domain: str, node: PyNode) -> List[Any]:
        has_tilde = "~" in own
        has_bracket = "[" in own
        if not has_tilde and not has_bracket:
            raise InvalidConfigError(f'Missing "~" or "[" at {domain}')
        if has_tilde and has_bracket:
            raise InvalidConfigError(f'Improper syntax for "~" and "[" at {domain}')
        if has_tilde:
            return self._parse_range(own, domain, node)
        return self._parse_list(own, domain)

    def _parse_range(self, own: str, domain: str, node: PyNode) -> List[Any]:
        left, _, right = own.partition("~")
        lower = self._parse_bound(left, domain)
        upper = self._parse_bound(right, domain)
        if lower > upper:
            raise InvalidConfigError(f"Lower bound {lower} is greater than upper bound {upper} in {domain}")
        if node.kind is NodeKind.FLOAT:
            return [float(value) for value in range(lower, upper + 1)]
        return list(range(lower, upper + 1))

    @staticmethod
    def _parse_bound(text: str, domain: str) -> int:
        try:
            return int(text.strip())
        except ValueError as exc:
            raise InvalidConfigError(f"Bound {text.strip()!r} isn't an integer in {domain}") from exc

    def _parse_list(self, own: str, domain: str) -> List[Any]:
        open_idx = own.index("[")
        close_idx = own.find("]")
        if close_idx == -1:
            raise InvalidConfigError(f"Missing ] in {domain}")
        if own[:open_idx].strip() or own[close_idx + 1:].strip():
            raise InvalidConfigError(f"Unexpected text around [...] in {domain}")

        body = own[open_idx + 1:close_idx].strip()
        if not body:
            raise InvalidConfigError(f"Empty domain in {domain}")

        values: List[Any] = []
        for token in body.split(","):
            number = self._parse_number(token.strip(), domain)
            if number not in values:
                values.append(number)
        return values

    @staticmethod
    def _parse_number(token: str, domain: str) -> Any:
        if not token:
            raise InvalidConfigError(f"Empty value in {domain}")
        try:
            return int(token)
        except ValueError:
            pass
        try:
            return float(token)
        except ValueError as exc:
            raise InvalidConfigError(f"{token!r} isn't a number in {domain}") from exc


def parse_config(filepath, parser: Optional[ConfigFileParser] = None) -> ConfigFile:
    """Parse the configuration file at filepath."""
    return (parser or ConfigFileParser()).parse_file(filepath)
