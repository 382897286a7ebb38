#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Tests for greedy test set minimization."""

import unittest

from casegen.minimization import coverage_universe, minimize


class TestMinimize(unittest.TestCase):

    def test_three_pairwise_overlapping_cases_need_two(self):
        kill_sets = {
            "A": frozenset({1, 2}),
            "B": frozenset({2, 3}),
            "C": frozenset({1, 3}),
        }

        selected = minimize(kill_sets)

        self.assertEqual(len(selected), 2)
        self.assertEqual(selected[0], "A")
        covered = set().union(*(kill_sets[case] for case in selected))
        self.assertEqual(covered, {1, 2, 3})

    def test_largest_gain_first(self):
        kill_sets = {
            "small": frozenset({"m1"}),
            "large": frozenset({"m1", "m2", "m3"}),
            "other": frozenset({"m4"}),
        }

        self.assertEqual(minimize(kill_sets), ["large", "other"])

    def test_ties_go_to_first_case(self):
        kill_sets = {
            "first": frozenset({"m1"}),
            "second": frozenset({"m1"}),
        }

        self.assertEqual(minimize(kill_sets), ["first"])

    def test_redundant_cases_are_dropped(self):
        kill_sets = {
            "broad": frozenset({"a", "b", "c"}),
            "subset": frozenset({"a", "b"}),
            "empty": frozenset(),
        }

        self.assertEqual(minimize(kill_sets), ["broad"])

    def test_no_kills_selects_nothing(self):
        self.assertEqual(minimize({"x": frozenset(), "y": frozenset()}), [])
        self.assertEqual(minimize({}), [])

    def test_idempotent(self):
        kill_sets = {
            "t1": frozenset({1, 2}),
            "t2": frozenset({3}),
            "t3": frozenset({2, 3, 4}),
            "t4": frozenset({5}),
            "t5": frozenset({1, 5}),
        }

        once = minimize(kill_sets)
        twice = minimize({case: kill_sets[case] for case in once})

        self.assertEqual(sorted(once), sorted(twice))
        self.assertEqual(coverage_universe({case: kill_sets[case] for case in once}),
                         coverage_universe(kill_sets))

    def test_every_pick_adds_coverage(self):
        kill_sets = {
            "t1": frozenset({1}),
            "t2": frozenset({1, 2}),
            "t3": frozenset({2, 3}),
            "t4": frozenset({3, 4}),
        }

        covered = set()
        for case in minimize(kill_sets):
            self.assertTrue(kill_sets[case] - covered)
            covered |= kill_sets[case]
        self.assertEqual(covered, {1, 2, 3, 4})


if __name__ == "__main__":
    unittest.main()
