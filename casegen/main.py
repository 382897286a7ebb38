#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Main entry point for the casegen CLI."""

import argparse
import json
import random
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from casegen import config
from casegen.debug_logger import DebugLogger, get_logger
from casegen.errors import CaseGenError, InvalidConfigError
from casegen.execution import Oracle, OracleReport, SubprocessRunner, discover_candidates
from casegen.execution.oracle import REFERENCE_ID
from casegen.generation import BaseSetGenerator
from casegen.minimization import minimize
from casegen.models.test_case import TestCase
from casegen.nodes import set_max_retries
from casegen.parse import ConfigFileParser


@dataclass
class RunResult:
    """Outcome of one generate-evaluate-minimize run."""
    func_name: str
    test_cases: List[TestCase]
    report: OracleReport
    base_set_size: int

    def kills(self, case: TestCase) -> List[str]:
        return sorted(self.report.kill_sets.get(case, frozenset()))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "fname": self.func_name,
            "base_set_size": self.base_set_size,
            "tests": [
                {
                    "call": case.call_repr(self.func_name),
                    "args": case.to_dict()["args"],
                    "expected": repr(self.report.expected.get(case)),
                    "kills": self.kills(case),
                }
                for case in self.test_cases
            ],
            "unreachable": self.report.unreachable(),
            "setup_failures": [failure.to_dict() for failure in self.report.setup_failures],
        }

    def render_text(self) -> str:
        """One call expression per selected test case."""
        return "\n".join(case.call_repr(self.func_name) for case in self.test_cases)


def generate_tests(
    config_path,
    candidate_dir,
    reference_path,
    settings: Optional[config.RunSettings] = None,
) -> RunResult:
    """Build a concise test set for the function described by config_path.

    Args:
        config_path: JSON or YAML configuration file
        candidate_dir: Directory holding one candidate implementation per ``*.py`` file
        reference_path: File holding the trusted implementation
        settings: Run settings; read from the environment when omitted

    Returns:
        RunResult with the minimized test cases and the oracle report

    Raises:
        InvalidConfigError: If the configuration is malformed
        FileNotFoundError: If the reference implementation does not exist
        NotADirectoryError: If the candidate directory does not exist
    """
    settings = settings or config.RunSettings.from_env()
    settings.validate()
    logger = get_logger()

    logger.log_workflow_phase("parse", {"config": str(config_path)})
    parsed = ConfigFileParser().parse_file(config_path)
    set_max_retries(parsed.nodes, settings.max_retries)

    reference_file = Path(reference_path)
    if not reference_file.is_file():
        raise FileNotFoundError(f"Reference implementation not found: {reference_path}")
    reference = SubprocessRunner(
        reference_file,
        parsed.func_name,
        timeout=settings.timeout,
        python=settings.python,
        identifier=REFERENCE_ID,
    )
    candidates = discover_candidates(
        candidate_dir, parsed.func_name, timeout=settings.timeout, python=settings.python
    )

    logger.log_workflow_phase("generate", {"seed": settings.seed})
    logger.log("main", "GENERATION_START", {
        "fname": parsed.func_name,
        "types": [node.type_string() for node in parsed.nodes],
        "num_random": parsed.num_random,
        "candidates": list(candidates),
    })
    base_set = BaseSetGenerator(parsed.nodes, parsed.num_random, random.Random(settings.seed)).gen_base_set()

    logger.log_workflow_phase("evaluate", {"test_cases": len(base_set), "candidates": len(candidates)})
    # Runners enforce the invocation timeout; the oracle waits an extra second for interpreter start-up
    oracle = Oracle(timeout=settings.timeout + 1, max_workers=settings.max_workers)
    report = oracle.run(base_set, reference, candidates)

    logger.log_workflow_phase("minimize", {"evaluated": len(report.kill_sets)})
    selected = minimize(report.kill_sets)

    return RunResult(
        func_name=parsed.func_name,
        test_cases=selected,
        report=report,
        base_set_size=len(base_set),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="casegen",
        description="casegen - generate a small test set that kills every buggy candidate",
    )
    parser.add_argument("config", nargs="?", help="JSON or YAML configuration file")
    parser.add_argument("candidate_dir", nargs="?", help="Directory of candidate implementations")
    parser.add_argument("reference", nargs="?", help="Reference implementation file")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="S",
        help=f"Seconds per invocation (default: {config.DEFAULT_TIMEOUT_SECONDS})"
    )
    parser.add_argument(
        "-j", "--workers",
        type=int,
        default=None,
        metavar="N",
        help=f"Concurrent invocations (default: {config.DEFAULT_MAX_WORKERS})"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for random test generation"
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=None,
        metavar="N",
        help=f"Collision retries when sampling sets and dicts (default: {config.DEFAULT_MAX_RETRIES})"
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable detailed debug logging to file"
    )
    parser.add_argument(
        "-v", "--version",
        action="store_true",
        help="Show casegen version information and exit"
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> config.RunSettings:
    settings = config.RunSettings.from_env()
    if args.timeout is not None:
        settings.timeout = args.timeout
    if args.workers is not None:
        settings.max_workers = args.workers
    if args.seed is not None:
        settings.seed = args.seed
    if args.max_retries is not None:
        settings.max_retries = args.max_retries
    return settings


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the casegen CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from casegen.versioning import build_version_output

        print(build_version_output())
        return 0

    if not (args.config and args.candidate_dir and args.reference):
        parser.error("CONFIG, CANDIDATE_DIR and REFERENCE are required")

    DebugLogger.reset()
    debug_logger = DebugLogger.initialize(enabled=args.debug)
    if args.debug:
        print(f"Debug logging enabled: {debug_logger.log_file_path}", file=sys.stderr)

    try:
        settings = _settings_from_args(args)
        debug_logger.log("main", "CONFIGURATION", {
            "config": args.config,
            "candidate_dir": args.candidate_dir,
            "reference": args.reference,
            "timeout": settings.timeout,
            "workers": settings.max_workers,
            "seed": settings.seed,
            "max_retries": settings.max_retries,
        })
        result = generate_tests(args.config, args.candidate_dir, args.reference, settings)
    except InvalidConfigError as e:
        debug_logger.log_error("main", e, {"context": "configuration"})
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        return 2
    except (CaseGenError, OSError, ValueError) as e:
        debug_logger.log_error("main", e, {"context": "run"})
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        debug_logger.log("main", "USER_INTERRUPT", {}, "WARNING")
        print("\n\nAborted by user", file=sys.stderr)
        return 1
    except Exception as e:
        debug_logger.log_error("main", e, {"context": "main execution"})
        raise
    finally:
        DebugLogger.reset()

    for failure in result.report.setup_failures:
        print(
            f"⚠️  Warning: reference failed on {TestCase(failure.args).call_repr(result.func_name)}: "
            f"{failure.failure}",
            file=sys.stderr,
        )
    unreachable = result.report.unreachable()
    if unreachable:
        print(f"⚠️  Warning: no test case kills {', '.join(unreachable)}", file=sys.stderr)

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    elif result.test_cases:
        print(result.render_text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
