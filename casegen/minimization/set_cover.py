#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Greedy test set minimization.

Choosing the fewest test cases whose kill sets together cover every killable
candidate is set cover, which is NP-hard. The greedy approximation used here
repeatedly takes the test case that kills the most still-uncovered
candidates, breaking ties by position in the input mapping so that the result
is reproducible.
"""

from typing import AbstractSet, Hashable, List, Mapping, Set, TypeVar

from casegen.debug_logger import get_logger

K = TypeVar("K", bound=Hashable)


def coverage_universe(kill_sets: Mapping[K, AbstractSet[str]]) -> Set[str]:
    """Return every candidate killed by at least one test case."""
    universe: Set[str] = set()
    for killed in kill_sets.values():
        universe |= killed
    return universe


def minimize(kill_sets: Mapping[K, AbstractSet[str]]) -> List[K]:
    """Select a small subset of test cases covering the whole coverage universe.

    Args:
        kill_sets: Test case to the candidates it kills, in a deterministic order

    Returns:
        Selected test cases in the order they were picked. Every pick had a
        non-empty marginal contribution when it was made, and together the
        picks kill every candidate any input test case kills.
    """
    logger = get_logger()
    uncovered = coverage_universe(kill_sets)
    remaining = [(case, frozenset(killed)) for case, killed in kill_sets.items() if killed]
    selected: List[K] = []

    while uncovered:
        best_index = -1
        best_gain = 0
        for index, (_, killed) in enumerate(remaining):
            gain = len(killed & uncovered)
            # Strict comparison keeps the earliest test case on ties
            if gain > best_gain:
                best_index, best_gain = index, gain
        if best_index < 0:
            break

        case, killed = remaining.pop(best_index)
        selected.append(case)
        uncovered -= killed
        logger.log("minimizer", "GREEDY_PICK", {
            "case": repr(case),
            "gain": best_gain,
            "uncovered": len(uncovered),
        }, "DEBUG")

    logger.log("minimizer", "MINIMIZATION_DONE", {
        "input_cases": len(kill_sets),
        "selected": len(selected),
    })
    return selected
