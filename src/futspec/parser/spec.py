# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for test specification blocks.

A test block is the text of a comment block with the comment prefix removed::

    Sums an array.
    ==
    tags { reduce }
    entry: sum
    input { [1, 2, 3] }
    output { 6 }
    compiled input { empty([0]i32) }
    output { 0 }
    structure { Screma 1 }
"""

import re

from futspec.model.entities import (
    DEFAULT_ENTRY_POINT,
    AnyError,
    CompileTimeFailure,
    ExpectedError,
    ExpectedResult,
    FileReference,
    InputOutputs,
    LiteralValues,
    ProgramTest,
    RunCases,
    RunTimeFailure,
    StructurePipeline,
    StructureTest,
    Succeeds,
    TestAction,
    TestRun,
    ThisError,
    Values,
)
from futspec.model.values import pretty
from futspec.parser.scanner import ParseError, Scanner
from futspec.parser.values import ValuesError, read_values

# ###############
# Public Interface
# ###############


def read_test_spec(text: str, source: str = "<string>") -> ProgramTest:
    """Parse the first test block of a program.

    Args:
        text: Block text with comment prefixes removed.
        source: Name used in error messages.

    Returns:
        The ProgramTest described by the block.

    Raises:
        ParseError: If the block is syntactically invalid.  The position is
            relative to *text*.
    """
    return _SpecParser(text, source).test_spec()


def read_input_outputs(text: str, source: str = "<string>") -> InputOutputs:
    """Parse a secondary test block, which adds run cases for one entry point.

    The description before the separator is required but discarded.

    Raises:
        ParseError: If the block is syntactically invalid.
    """
    return _SpecParser(text, source).secondary_block()


# ################
# Implementation
# ################

# Words that start the next grammar element and so can never be run tags.
_RESERVED_RUN_TAGS: frozenset[str] = frozenset({"input", "structure"})

_PIPELINE_KEYWORDS: dict[str, StructurePipeline] = {
    "distributed": StructurePipeline.KERNELS,
    "gpu": StructurePipeline.GPU,
    "cpu": StructurePipeline.SEQUENTIAL_CPU,
}

_DESCRIPTION_LIMIT = 50


def _is_name_char(c: str) -> bool:
    return not c.isspace() and c != "}"


def _is_metric_char(c: str) -> bool:
    return c.isalnum() or c == "/"


class _SpecParser:
    """Recursive-descent parser over a Scanner."""

    def __init__(self, text: str, source: str) -> None:
        self._scan = Scanner(text, source)
        self._source = source

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def test_spec(self) -> ProgramTest:
        """Parse: Description Tags? Action StructureTest*"""
        description = self._scan.description()
        tags = self._parse_tags()
        action = self._parse_action()
        structure_tests: list[StructureTest] = []
        while self._scan.keyword("structure"):
            structure_tests.append(self._parse_structure_test())
        self._scan.expect_end()
        return ProgramTest(
            description=description,
            tags=tags,
            action=action,
            structure_tests=structure_tests,
        )

    def secondary_block(self) -> InputOutputs:
        """Parse: Description InputOutputs"""
        self._scan.description()
        cases = self._parse_input_outputs()
        self._scan.expect_end()
        return cases

    # ------------------------------------------------------------------
    # Tags and actions
    # ------------------------------------------------------------------

    def _parse_tags(self) -> list[str]:
        """Parse: tags { tag* }"""
        tags: list[str] = []
        if not self._scan.keyword("tags"):
            return tags
        self._scan.expect_keyword("{")
        while True:
            tag = self._scan.word(_is_name_char, "tag")
            if not tag:
                break
            tags.append(tag)
        self._scan.expect_keyword("}")
        return tags

    def _parse_action(self) -> TestAction:
        """Parse: error: <pattern> | InputOutputs"""
        if self._scan.keyword("error:", skip_after=False):
            return CompileTimeFailure(error=self._parse_expected_error())
        return RunCases(cases=[self._parse_input_outputs()])

    def _parse_input_outputs(self) -> InputOutputs:
        """Parse: [entry: <name>] RunCase*"""
        entry_point = DEFAULT_ENTRY_POINT
        if self._scan.keyword("entry:"):
            entry_point = self._scan.word(_is_name_char, "entry point name")
            if not entry_point:
                raise self._scan.error()
        runs: list[TestRun] = []
        while True:
            run = self._parse_run_case(len(runs))
            if run is None:
                break
            runs.append(run)
        return InputOutputs(entry_point=entry_point, runs=runs)

    # ------------------------------------------------------------------
    # Run cases
    # ------------------------------------------------------------------

    def _parse_run_case(self, index: int) -> TestRun | None:
        """Parse: tag* input <values> <expected result>

        Returns None if no run case starts at the current position.
        """
        tags: list[str] = []
        while True:
            tag = self._scan.word(str.isalnum, "run tag", exclude=_RESERVED_RUN_TAGS)
            if not tag:
                break
            tags.append(tag)
        if not self._scan.keyword("input"):
            if tags:
                raise self._scan.error()
            return None
        run_input = self._parse_values("input")
        expected = self._parse_expected_result()
        return TestRun(
            tags=tags,
            input=run_input,
            expected_result=expected,
            description=_run_description(index, run_input),
        )

    def _parse_expected_result(self) -> ExpectedResult:
        """Parse: output <values> | error: <pattern> | nothing"""
        if self._scan.keyword("output"):
            return Succeeds(values=self._parse_values("output"))
        if self._scan.keyword("error:", skip_after=False):
            return RunTimeFailure(error=self._parse_expected_error())
        return Succeeds()

    def _parse_expected_error(self) -> ExpectedError:
        """Parse the rest of the line as an error pattern.  A blank line accepts any error."""
        self._scan.skip_blanks()
        line, column = self._scan.position
        pattern = self._scan.rest_of_line()
        self._scan.skip_spaces()
        if not pattern.strip():
            return AnyError()
        try:
            return ThisError.from_pattern(pattern)
        except re.error as exc:
            raise ParseError(f"Invalid error pattern {pattern!r}: {exc}", line, column, self._source) from exc

    def _parse_values(self, context: str) -> Values:
        """Parse: { <value text> } | @ <file>"""
        if self._scan.check("{"):
            text, line, column = self._scan.balanced_block()
            try:
                values = read_values(text)
            except ValuesError as exc:
                # Value text positions are relative to the start of the block content.
                err_line = line + exc.line - 1
                err_column = column + exc.column - 1 if exc.line == 1 else exc.column
                raise ParseError(f"Invalid {context} values: {exc.reason}", err_line, err_column, self._source) from exc
            return LiteralValues(values=values)
        if self._scan.keyword("@"):
            return FileReference(path=self._scan.next_word("file name"))
        raise self._scan.error()

    # ------------------------------------------------------------------
    # Structure tests
    # ------------------------------------------------------------------

    def _parse_structure_test(self) -> StructureTest:
        """Parse (after 'structure'): [distributed|gpu|cpu] { (<metric> <count>)* }"""
        pipeline = StructurePipeline.SOACS
        for keyword, candidate in _PIPELINE_KEYWORDS.items():
            if self._scan.keyword(keyword):
                pipeline = candidate
                break
        self._scan.expect_keyword("{")
        metrics: dict[str, int] = {}
        while True:
            name = self._scan.word(_is_metric_char, "metric name")
            if not name:
                break
            metrics[name] = self._scan.natural()
        self._scan.expect_keyword("}")
        return StructureTest(pipeline=pipeline, metrics=metrics)


def _run_description(index: int, run_input: Values) -> str:
    """Summarise a run's input for display."""
    if isinstance(run_input, FileReference):
        return run_input.path
    text = " ".join(pretty(v) for v in run_input.values)
    if len(text) > _DESCRIPTION_LIMIT:
        text = text[:_DESCRIPTION_LIMIT] + "..."
    text = " ".join(text.splitlines())
    return f'#{index} ("{text}")'
