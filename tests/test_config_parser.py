#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Tests for configuration file parsing."""

import json

import pytest

from casegen.errors import InvalidConfigError
from casegen.nodes import BoolNode, DictNode, FloatNode, IntNode, ListNode, NodeKind, SetNode, StrNode, TupleNode
from casegen.parse import ConfigFile, ConfigFileParser, parse_config


def _config(**overrides):
    data = {
        "fname": "func",
        "types": ["int"],
        "exhaustive domain": ["0~2"],
        "random domain": ["-5~5"],
        "num random": 10,
    }
    data.update(overrides)
    return json.dumps(data)


@pytest.fixture
def parser():
    return ConfigFileParser()


class TestParse:

    def test_simple_config(self, parser):
        parsed = parser.parse(_config())

        assert isinstance(parsed, ConfigFile)
        assert parsed.func_name == "func"
        assert parsed.num_random == 10
        assert len(parsed.nodes) == 1
        node = parsed.nodes[0]
        assert isinstance(node, IntNode)
        assert node.exhaustive_domain == [0, 1, 2]
        assert node.random_domain == list(range(-5, 6))

    def test_nested_types_and_domains(self, parser):
        parsed = parser.parse(_config(
            types=["list(str(ab))", "dict(int:bool)", "set(tuple(float))"],
            **{
                "exhaustive domain": ["[0, 2](1~2)", "[1](0~1:[0,1])", "[1]([2]([0.5]))"],
                "random domain": ["0~3(0~4)", "0~2(0~9:0~1)", "0~2(0~2(-1~1))"],
            }
        ))

        strings, mapping, sets = parsed.nodes
        assert isinstance(strings, ListNode)
        assert isinstance(strings.left_child, StrNode)
        assert strings.left_child.char_domain == "ab"
        assert strings.exhaustive_domain == [0, 2]
        assert strings.left_child.exhaustive_domain == [1, 2]

        assert isinstance(mapping, DictNode)
        assert isinstance(mapping.left_child, IntNode)
        assert isinstance(mapping.right_child, BoolNode)
        assert mapping.exhaustive_domain == [1]
        assert mapping.right_child.exhaustive_domain == [0, 1]
        assert mapping.left_child.random_domain == list(range(10))

        assert isinstance(sets, SetNode)
        assert isinstance(sets.left_child, TupleNode)
        assert isinstance(sets.left_child.left_child, FloatNode)
        assert sets.left_child.left_child.exhaustive_domain == [0.5]
        assert sets.left_child.left_child.random_domain == [-1.0, 0.0, 1.0]

    def test_unclosed_parentheses_accepted(self, parser):
        parsed = parser.parse(_config(
            types=["list(list(int"],
            **{"exhaustive domain": ["[1]([1](0~1"], "random domain": ["0~1(0~1(0~1"]}
        ))

        node = parsed.nodes[0]
        assert node.type_string() == "list(list(int))"
        assert node.left_child.left_child.exhaustive_domain == [0, 1]

    def test_bracket_domain_deduplicated_in_order(self, parser):
        parsed = parser.parse(_config(**{"exhaustive domain": ["[3, 1, 3, 2]"]}))

        assert parsed.nodes[0].exhaustive_domain == [3, 1, 2]

    def test_tilde_domain_for_floats_is_whole_numbers(self, parser):
        parsed = parser.parse(_config(types=["float"]))

        assert parsed.nodes[0].exhaustive_domain == [0.0, 1.0, 2.0]

    def test_single_value_range(self, parser):
        parsed = parser.parse(_config(**{"exhaustive domain": ["4~4"]}))

        assert parsed.nodes[0].exhaustive_domain == [4]

    def test_yaml_format(self, parser):
        contents = (
            "fname: func\n"
            "types: ['int', 'str(xy)']\n"
            "exhaustive domain: ['0~1', '0~1']\n"
            "random domain: ['[7]', '[2]']\n"
            "num random: 3\n"
        )

        parsed = parser.parse(contents, fmt="yaml")

        assert [node.kind for node in parsed.nodes] == [NodeKind.INT, NodeKind.STR]
        assert parsed.nodes[1].random_domain == [2]

    def test_function_name_trimmed(self, parser):
        assert parser.parse(_config(fname="  f  ")).func_name == "f"


class TestParseErrors:

    @pytest.mark.parametrize("field", ["fname", "types", "exhaustive domain", "random domain", "num random"])
    def test_missing_field(self, parser, field):
        data = json.loads(_config())
        del data[field]

        with pytest.raises(InvalidConfigError, match=f"Missing {field} field"):
            parser.parse(json.dumps(data))

    @pytest.mark.parametrize("contents", ["{not json", "[1, 2]", "42"])
    def test_invalid_document(self, parser, contents):
        with pytest.raises(InvalidConfigError):
            parser.parse(contents)

    def test_invalid_yaml(self, parser):
        with pytest.raises(InvalidConfigError):
            parser.parse("fname: [unclosed", fmt="yaml")

    def test_array_fields_must_be_arrays(self, parser):
        with pytest.raises(InvalidConfigError, match="types value isn't an array"):
            parser.parse(_config(types="int"))

    def test_domain_count_must_match(self, parser):
        with pytest.raises(InvalidConfigError, match="Need 1 domains but found 2"):
            parser.parse(_config(**{"random domain": ["0~1", "0~1"]}))

    @pytest.mark.parametrize("type_str, message", [
        ("integer", "Invalid syntax"),
        ("list", "Missing parenthesis"),
        ("str()", "No char domain"),
        ("list()", "No further types"),
        ("dict(int)", "Missing colon"),
        ("set(list(int))", "hashable"),
    ])
    def test_bad_types(self, parser, type_str, message):
        with pytest.raises(InvalidConfigError, match=message):
            parser.parse(_config(types=[type_str]))

    @pytest.mark.parametrize("domain, message", [
        ("0-2", 'Missing "~" or "\\["'),
        ("[0]~2", "Improper syntax"),
        ("2~0", "greater than"),
        ("a~2", "isn't an integer"),
        ("0.5~2", "isn't an integer"),
        ("[1, x]", "isn't a number"),
        ("[1, 2", "Missing \\]"),
        ("[]", "Empty domain"),
        ("[1,,2]", "Empty value"),
        ("0~1(0~1)", "unexpected"),
        ("[1.5]", "invalid"),
    ])
    def test_bad_scalar_domains(self, parser, domain, message):
        with pytest.raises(InvalidConfigError, match=message):
            parser.parse(_config(**{"exhaustive domain": [domain]}))

    def test_colon_unexpected_in_scalar_domain(self, parser):
        with pytest.raises(InvalidConfigError, match='":" unexpected'):
            parser.parse(_config(**{"random domain": ["0~1:0~1"]}))

    def test_compound_domain_needs_child_domain(self, parser):
        with pytest.raises(InvalidConfigError, match="Missing parenthesis"):
            parser.parse(_config(types=["list(int)"], **{"exhaustive domain": ["0~2"]}))

    def test_dict_domain_needs_colon(self, parser):
        with pytest.raises(InvalidConfigError, match="Missing colon"):
            parser.parse(_config(types=["dict(int:int)"], **{"exhaustive domain": ["1(0~1)"]}))

    def test_negative_size_rejected(self, parser):
        with pytest.raises(InvalidConfigError):
            parser.parse(_config(types=["str(a)"], **{"exhaustive domain": ["-1~1"]}))

    def test_bool_domain_limited_to_zero_and_one(self, parser):
        with pytest.raises(InvalidConfigError):
            parser.parse(_config(types=["bool"], **{"exhaustive domain": ["0~2"]}))

    @pytest.mark.parametrize("value", ["10", 1.5, True, -1])
    def test_bad_num_random(self, parser, value):
        with pytest.raises(InvalidConfigError, match="num random"):
            parser.parse(_config(**{"num random": value}))

    @pytest.mark.parametrize("value", [3, ""])
    def test_bad_fname(self, parser, value):
        with pytest.raises(InvalidConfigError, match="fname"):
            parser.parse(_config(fname=value))

    def test_non_string_domain(self, parser):
        with pytest.raises(InvalidConfigError):
            parser.parse(_config(**{"exhaustive domain": [[0, 1]]}))


def test_parse_config_reads_by_suffix(tmp_path):
    json_path = tmp_path / "config.json"
    json_path.write_text(_config(fname="from_json"), encoding="utf-8")
    yaml_path = tmp_path / "config.yml"
    yaml_path.write_text(
        "fname: from_yaml\ntypes: [int]\nexhaustive domain: ['0~1']\nrandom domain: ['0~1']\nnum random: 0\n",
        encoding="utf-8",
    )

    assert parse_config(json_path).func_name == "from_json"
    assert parse_config(yaml_path).func_name == "from_yaml"


def test_read_file_missing(tmp_path):
    with pytest.raises(OSError):
        ConfigFileParser().read_file(tmp_path / "missing.json")
