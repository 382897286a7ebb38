#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Tests for the casegen error taxonomy."""

import unittest

from casegen.errors import (
    CaseGenError,
    ExecutionFailure,
    ExecutionFailureType,
    GenerationError,
    InvalidConfigError,
    SetupFailure,
    exception_failure,
    timeout_failure,
)


class TestErrorTaxonomy(unittest.TestCase):

    def test_hierarchy(self):
        self.assertTrue(issubclass(InvalidConfigError, CaseGenError))
        self.assertTrue(issubclass(GenerationError, CaseGenError))
        self.assertTrue(issubclass(ExecutionFailure, CaseGenError))

    def test_failure_message_and_dict(self):
        failure = ExecutionFailure(ExecutionFailureType.NONZERO_EXIT, "a.py", "exit code 1")

        self.assertEqual(str(failure), "a.py: nonzero_exit - exit code 1")
        self.assertEqual(failure.to_dict(), {
            "runner": "a.py",
            "failure_type": "nonzero_exit",
            "detail": "exit code 1",
        })

    def test_timeout_factory(self):
        failure = timeout_failure("slow.py", 2.5)

        self.assertTrue(failure.failure_type.is_timeout)
        self.assertIn("2.5", failure.detail)
        self.assertEqual(timeout_failure("slow.py").detail, "timed out")

    def test_exception_factory(self):
        failure = exception_failure("ref", KeyError("k"))

        self.assertIs(failure.failure_type, ExecutionFailureType.EXCEPTION)
        self.assertFalse(failure.failure_type.is_timeout)
        self.assertTrue(failure.detail.startswith("KeyError"))

    def test_setup_failure_dict(self):
        setup = SetupFailure((0, [1]), timeout_failure("reference"))

        data = setup.to_dict()
        self.assertEqual(data["args"], "(0, [1])")
        self.assertEqual(data["runner"], "reference")
        self.assertEqual(data["failure_type"], "timeout")


if __name__ == "__main__":
    unittest.main()
