#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""End-to-end tests for generate_tests() and the casegen CLI."""

import json
import sys

import pytest

from casegen import config
from casegen.errors import InvalidConfigError
from casegen.main import generate_tests, main
from casegen.models import TestCase

REFERENCE = """
def clamp(x, lo):
    return max(x, lo)
"""

CANDIDATES = {
    "ignores_lo.py": """
def clamp(x, lo):
    return x
""",
    "always_lo.py": """
def clamp(x, lo):
    return lo
""",
    "correct.py": """
def clamp(x, lo):
    return lo if x < lo else x
""",
    "crashes.py": """
def clamp(x, lo):
    raise ValueError("nope")
""",
}


@pytest.fixture
def project(tmp_path, write_impl):
    """A config, a reference and a directory of candidates for clamp()."""
    config_path = tmp_path / "clamp.json"
    config_path.write_text(json.dumps({
        "fname": "clamp",
        "types": ["int", "int"],
        "exhaustive domain": ["0~2", "[1]"],
        "random domain": ["0~2", "[1]"],
        "num random": 2,
    }), encoding="utf-8")
    reference = write_impl("reference.py", REFERENCE)
    candidates_dir = tmp_path / "candidates"
    for name, source in CANDIDATES.items():
        write_impl(name, source, candidates_dir)
    return config_path, candidates_dir, reference


@pytest.fixture
def settings():
    return config.RunSettings(timeout=30, max_workers=4, seed=0, max_retries=10, python=sys.executable)


def test_generate_tests_kills_every_buggy_candidate(project, settings):
    result = generate_tests(*project, settings=settings)

    assert result.func_name == "clamp"
    assert result.base_set_size == 3 + 2
    assert result.report.unreachable() == ["correct.py"]

    killed = set()
    for case in result.test_cases:
        killed |= result.report.kill_sets[case]
    assert killed == {"always_lo.py", "crashes.py", "ignores_lo.py"}
    # (0, 1) alone kills ignores_lo and crashes; one more case is needed for always_lo
    assert len(result.test_cases) == 2
    assert result.test_cases[0] == TestCase([0, 1])


def test_result_serialization(project, settings):
    result = generate_tests(*project, settings=settings)
    data = result.to_dict()

    assert data["fname"] == "clamp"
    assert data["tests"][0]["call"] == "clamp(0, 1)"
    assert data["tests"][0]["expected"] == "1"
    assert data["tests"][0]["kills"] == ["crashes.py", "ignores_lo.py"]
    assert data["unreachable"] == ["correct.py"]
    assert result.render_text().splitlines()[0] == "clamp(0, 1)"


def test_reference_failures_reported(tmp_path, write_impl, settings):
    config_path = tmp_path / "inv.json"
    config_path.write_text(json.dumps({
        "fname": "inv",
        "types": ["int"],
        "exhaustive domain": ["0~2"],
        "random domain": ["[1]"],
        "num random": 0,
    }), encoding="utf-8")
    reference = write_impl("reference.py", "def inv(x):\n    return 1 / x\n")
    candidates_dir = tmp_path / "candidates"
    write_impl("floor.py", "def inv(x):\n    return 1 // x\n", candidates_dir)

    result = generate_tests(config_path, candidates_dir, reference, settings)

    assert [failure.args for failure in result.report.setup_failures] == [(0,)]
    assert TestCase([0]) not in result.report.kill_sets
    assert result.test_cases == [TestCase([2])]


def test_invalid_config_raises(tmp_path, write_impl, settings):
    config_path = tmp_path / "bad.json"
    config_path.write_text('{"fname": "f"}', encoding="utf-8")
    reference = write_impl("reference.py", "def f():\n    return 0\n")

    with pytest.raises(InvalidConfigError):
        generate_tests(config_path, tmp_path, reference, settings)


def test_missing_reference_raises(project, settings, tmp_path):
    config_path, candidates_dir, _ = project

    with pytest.raises(FileNotFoundError):
        generate_tests(config_path, candidates_dir, tmp_path / "missing.py", settings)


class TestCli:

    def test_text_output(self, project, capsys):
        config_path, candidates_dir, reference = project

        code = main([str(config_path), str(candidates_dir), str(reference), "--seed", "0", "--timeout", "30"])

        captured = capsys.readouterr()
        assert code == 0
        assert captured.out.splitlines()[0] == "clamp(0, 1)"
        assert "correct.py" in captured.err

    def test_json_output(self, project, capsys):
        config_path, candidates_dir, reference = project

        code = main([str(config_path), str(candidates_dir), str(reference), "--format", "json", "-j", "2"])

        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["fname"] == "clamp"
        assert data["base_set_size"] == 5

    def test_config_error_exit_code(self, tmp_path, write_impl, capsys):
        config_path = tmp_path / "bad.json"
        config_path.write_text("{not json", encoding="utf-8")
        reference = write_impl("reference.py", "def f():\n    return 0\n")

        code = main([str(config_path), str(tmp_path), str(reference)])

        assert code == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_missing_candidate_dir_exit_code(self, project, tmp_path, capsys):
        config_path, _, reference = project

        code = main([str(config_path), str(tmp_path / "nowhere"), str(reference)])

        assert code == 1
        assert "Candidate directory not found" in capsys.readouterr().err

    def test_invalid_settings_exit_code(self, project, capsys):
        code = main([str(path) for path in project] + ["--timeout", "0"])

        assert code == 1
        assert "timeout must be positive" in capsys.readouterr().err

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert "casegen" in capsys.readouterr().out

    def test_positional_arguments_required(self):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2

    def test_debug_log_written(self, project, tmp_path, monkeypatch, capsys):
        logs_dir = tmp_path / "logs"
        monkeypatch.setattr(config, "LOGS_DIR", logs_dir)

        code = main([str(path) for path in project] + ["--debug", "--seed", "1"])

        assert code == 0
        log_files = list(logs_dir.glob("casegen_debug_*.log"))
        assert len(log_files) == 1
        content = log_files[0].read_text(encoding="utf-8")
        assert "GENERATION_START" in content
        assert "BASE_SET_ASSEMBLED" in content
        assert "MINIMIZATION_DONE" in content
