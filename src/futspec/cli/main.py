# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the futspec command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from yachalk import chalk

from futspec.loader.merge import SpecError
from futspec.loader.specs import find_programs, spec_from_file
from futspec.model.entities import (
    AnyError,
    CompileTimeFailure,
    ExpectedError,
    ExpectedResult,
    FileReference,
    ProgramTest,
    RunTimeFailure,
    TestRun,
)
from futspec.model.values import pretty
from futspec.parser.scanner import ParseError
from futspec.workspace.config import ProjectConfig, ProjectConfigError, find_project_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the futspec CLI."""
    parser = argparse.ArgumentParser(
        prog="futspec",
        description="futspec - read test specifications embedded in Futhark programs",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print debug messages while loading programs",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check that test specifications parse",
        description="Parse the test specification of every test program and report errors.",
    )
    check_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Test programs or directories containing them (default: current directory)",
    )

    # show subcommand
    show_parser = subparsers.add_parser(
        "show",
        help="Show the test specification of a program",
        description="Print the parsed test specification of a single test program.",
    )
    show_parser.add_argument("file", help="Test program to read")
    show_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the specification as JSON",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "show":
        return _cmd_show(args)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    has_errors = False
    programs: list[Path] = []
    for raw_path in args.paths:
        path = Path(raw_path)
        try:
            config = find_project_config(path) if path.is_dir() else ProjectConfig()
            programs.extend(find_programs(path, config.source_extension, config.exclude))
        except (ProjectConfigError, SpecError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            has_errors = True

    if not programs:
        if not has_errors:
            print("No test programs found.")
        return 1 if has_errors else 0

    print(f"Checking {len(programs)} test program(s)...")
    failed = 0
    for program in programs:
        try:
            spec_from_file(program)
        except (ParseError, SpecError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            failed += 1

    if failed or has_errors:
        print(chalk.red(f"{failed} of {len(programs)} test program(s) failed."))
        return 1

    print(chalk.green("No issues found."))
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    """Handle the show subcommand."""
    path = Path(args.file)
    if not path.is_file():
        print(f"Error: file '{path}' does not exist.", file=sys.stderr)
        return 1

    try:
        spec = spec_from_file(path)
    except (ParseError, SpecError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(spec.model_dump_json(indent=2))
    else:
        for line in _describe(spec):
            print(line)
    return 0


def _describe(spec: ProgramTest) -> list[str]:
    """Render a specification as human-readable lines."""
    lines = [f"Description: {spec.description or '(none)'}"]
    if spec.tags:
        lines.append(f"Tags: {', '.join(spec.tags)}")

    if isinstance(spec.action, CompileTimeFailure):
        lines.append(f"Expected compilation failure: {_describe_error(spec.action.error)}")
    else:
        for cases in spec.action.cases:
            lines.append(f"Entry point {cases.entry_point}: {len(cases.runs)} run(s)")
            for run in cases.runs:
                lines.append(f"  {_describe_run(run)}")

    for structure in spec.structure_tests:
        metrics = ", ".join(f"{name}={count}" for name, count in sorted(structure.metrics.items()))
        lines.append(f"Structure ({structure.pipeline.value}): {metrics or '(no metrics)'}")
    return lines


def _describe_run(run: TestRun) -> str:
    text = run.description
    if run.tags:
        text += f" [{', '.join(run.tags)}]"
    return f"{text} -> {_describe_result(run.expected_result)}"


def _describe_result(result: ExpectedResult) -> str:
    if isinstance(result, RunTimeFailure):
        return f"fails with {_describe_error(result.error)}"
    if result.values is None:
        return "succeeds"
    if isinstance(result.values, FileReference):
        return f"outputs @ {result.values.path}"
    return "outputs " + " ".join(pretty(v) for v in result.values.values)


def _describe_error(error: ExpectedError) -> str:
    if isinstance(error, AnyError):
        return "any error"
    return f"error matching {error.pattern!r}"
