#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Oracle: derive kill sets by comparing candidates against the reference.

For every distinct test case the reference is run once and its output becomes
the expected output. A reference failure drops the test case (there is no
ground truth to compare against) and is recorded as a setup failure. Every
candidate is then run on every remaining test case; a candidate whose output
differs from the expected output, or that fails or times out, is "killed" by
that test case.

Invocations run on a thread pool. Each invocation also gets its own daemon
thread joined with the timeout, so a hung implementation is reported as a
timeout without holding up evaluation of the others.
"""

import math
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from casegen import config
from casegen.debug_logger import get_logger
from casegen.errors import (
    ExecutionFailure,
    ExecutionFailureType,
    SetupFailure,
    exception_failure,
    timeout_failure,
)
from casegen.minimization.set_cover import coverage_universe
from casegen.models.test_case import TestCase

KillSetMap = Dict[TestCase, FrozenSet[str]]
RunnerFn = Callable[[Sequence[Any]], Any]

REFERENCE_ID = "reference"


@dataclass
class InvocationResult:
    """Outcome of running one implementation on one test case."""
    ok: bool
    value: Any = None
    failure: Optional[ExecutionFailure] = None


@dataclass
class OracleReport:
    """Everything the oracle learned about a test set."""
    candidates: List[str]
    kill_sets: KillSetMap = field(default_factory=dict)
    expected: Dict[TestCase, Any] = field(default_factory=dict)
    setup_failures: List[SetupFailure] = field(default_factory=list)

    def coverage_universe(self) -> Set[str]:
        """Candidates killed by at least one test case."""
        return coverage_universe(self.kill_sets)

    def unreachable(self) -> List[str]:
        """Candidates no test case kills, in candidate order."""
        universe = self.coverage_universe()
        return [cid for cid in self.candidates if cid not in universe]


def _outputs_match(expected: Any, actual: Any) -> bool:
    """Value equality, except that NaN matches NaN at any sequence depth."""
    if isinstance(expected, float) and isinstance(actual, float):
        if math.isnan(expected) and math.isnan(actual):
            return True
    if type(expected) in (list, tuple) and type(actual) is type(expected):
        return len(expected) == len(actual) and all(
            _outputs_match(left, right) for left, right in zip(expected, actual)
        )
    try:
        return bool(expected == actual)
    except Exception:
        # Values that cannot be compared are treated as different
        return False


def _runner_id(runner: Any, default: str) -> str:
    return getattr(runner, "identifier", None) or default


class Oracle:
    """Runs the reference and candidates over a test set and builds kill sets."""

    def __init__(
        self,
        timeout: float = config.DEFAULT_TIMEOUT_SECONDS,
        max_workers: int = config.DEFAULT_MAX_WORKERS,
    ):
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.timeout = timeout
        self.max_workers = max_workers

    def _invoke(self, runner: RunnerFn, runner_id: str, args: Tuple[Any, ...]) -> InvocationResult:
        """Run one implementation on one argument tuple under the timeout."""
        box: Dict[str, Any] = {}

        def target():
            try:
                box["value"] = runner(args)
            except ExecutionFailure as failure:
                box["failure"] = failure
            except Exception as exc:
                box["failure"] = exception_failure(runner_id, exc)

        worker = threading.Thread(target=target, name=f"casegen-{runner_id}", daemon=True)
        worker.start()
        worker.join(self.timeout)

        if worker.is_alive():
            result = InvocationResult(ok=False, failure=timeout_failure(runner_id, self.timeout))
        elif "failure" in box:
            result = InvocationResult(ok=False, failure=box["failure"])
        elif "value" in box:
            result = InvocationResult(ok=True, value=box["value"])
        else:
            # The thread ended without a result, e.g. sys.exit() in the implementation
            result = InvocationResult(ok=False, failure=ExecutionFailure(
                ExecutionFailureType.EXCEPTION, runner_id, "exited without a result"))

        get_logger().log_invocation(
            runner_id,
            args,
            result=result.value,
            error=str(result.failure) if result.failure else None,
        )
        return result

    def run(
        self,
        test_cases: Iterable[TestCase],
        reference: RunnerFn,
        candidates: Mapping[str, RunnerFn],
    ) -> OracleReport:
        """Evaluate every test case against the reference and all candidates.

        Args:
            test_cases: Test cases to evaluate; duplicates are evaluated once
            reference: Runner for the trusted implementation
            candidates: Runners for the candidate implementations, by identifier

        Returns:
            OracleReport with kill sets (in first-occurrence order of the test
            cases), reference outputs and setup failures
        """
        logger = get_logger()
        candidate_ids = list(candidates)
        report = OracleReport(candidates=candidate_ids)
        distinct = list(dict.fromkeys(test_cases))
        reference_id = _runner_id(reference, REFERENCE_ID)

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="casegen-oracle") as pool:
            reference_futures: List[Future] = [
                pool.submit(self._invoke, reference, reference_id, case.args) for case in distinct
            ]

            evaluable: List[TestCase] = []
            for case, future in zip(distinct, reference_futures):
                outcome = future.result()
                if outcome.ok:
                    report.expected[case] = outcome.value
                    evaluable.append(case)
                    continue
                report.setup_failures.append(SetupFailure(case.args, outcome.failure))
                logger.log("oracle", "REFERENCE_FAILURE", {
                    "args": case.args_repr(),
                    "failure": outcome.failure.to_dict(),
                }, "WARNING")

            candidate_futures: Dict[Tuple[TestCase, str], Future] = {
                (case, cid): pool.submit(self._invoke, candidates[cid], cid, case.args)
                for case in evaluable
                for cid in candidate_ids
            }

            for case in evaluable:
                expected = report.expected[case]
                killed = set()
                for cid in candidate_ids:
                    outcome = candidate_futures[(case, cid)].result()
                    if not outcome.ok:
                        killed.add(cid)
                        logger.log("oracle", "CANDIDATE_FAILURE", {
                            "args": case.args_repr(),
                            "failure": outcome.failure.to_dict(),
                        }, "DEBUG")
                    elif not _outputs_match(expected, outcome.value):
                        killed.add(cid)
                report.kill_sets[case] = frozenset(killed)
                logger.log("oracle", "CASE_EVALUATED", {
                    "args": case.args_repr(),
                    "killed": sorted(killed),
                }, "DEBUG")

        return report

    def evaluate(
        self,
        test_cases: Iterable[TestCase],
        reference: RunnerFn,
        candidates: Mapping[str, RunnerFn],
    ) -> KillSetMap:
        """Return only the kill-set map of run()."""
        return self.run(test_cases, reference, candidates).kill_sets


def evaluate(
    test_cases: Iterable[TestCase],
    reference: RunnerFn,
    candidates: Mapping[str, RunnerFn],
    *,
    timeout: float = config.DEFAULT_TIMEOUT_SECONDS,
    max_workers: int = config.DEFAULT_MAX_WORKERS,
) -> KillSetMap:
    """Build the kill-set map for test_cases with a default-configured Oracle."""
    return Oracle(timeout=timeout, max_workers=max_workers).evaluate(test_cases, reference, candidates)
