# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the test specification block parser."""

import pytest

from futspec.model.entities import (
    AnyError,
    CompileTimeFailure,
    FileReference,
    InputOutputs,
    LiteralValues,
    ProgramTest,
    RunCases,
    RunTimeFailure,
    StructurePipeline,
    Succeeds,
    ThisError,
)
from futspec.model.values import ArrayValue, PrimitiveType, ScalarValue
from futspec.parser.scanner import ParseError
from futspec.parser.spec import read_input_outputs, read_test_spec

# ###############
# Test Helpers
# ###############


def _block(*lines: str) -> str:
    """Build block text the way comment extraction produces it: one leading space per line."""
    return "".join(f" {line}\n" for line in lines)


def _spec(*lines: str) -> ProgramTest:
    return read_test_spec(_block(*lines))


def _cases(*lines: str) -> list[InputOutputs]:
    """Parse a primary block that must declare run cases."""
    action = _spec(*lines).action
    assert isinstance(action, RunCases)
    return action.cases


# ###############
# End-to-End Scenarios
# ###############


class TestScenarios:
    def test_single_run_case(self) -> None:
        spec = _spec("==", "input { 10 }", "output { [4i32, 3i32] }")
        assert spec.description == ""
        assert spec.tags == []
        assert spec.structure_tests == []
        assert isinstance(spec.action, RunCases)
        [cases] = spec.action.cases
        assert cases.entry_point == "main"
        [run] = cases.runs
        assert run.tags == []
        assert run.input == LiteralValues(values=[ScalarValue(type=PrimitiveType.I32, value=10)])
        assert run.expected_result == Succeeds(
            values=LiteralValues(values=[ArrayValue(element_type=PrimitiveType.I32, shape=[2], data=[4, 3])])
        )
        assert run.description == '#0 ("10")'

    def test_compile_time_failure(self) -> None:
        spec = _spec("==", "error: functional")
        assert isinstance(spec.action, CompileTimeFailure)
        error = spec.action.error
        assert isinstance(error, ThisError)
        assert error.pattern == "functional"
        assert error.matches("Type error: not functional enough")


# ###############
# Descriptions and Tags
# ###############


class TestDescriptionAndTags:
    def test_description_is_trimmed(self) -> None:
        spec = _spec("Sums an array.", "==", "input { [1, 2] }")
        assert spec.description == "Sums an array."

    def test_multi_line_description(self) -> None:
        spec = _spec("Line one", "Line two", "==")
        assert spec.description.startswith("Line one")
        assert "Line two" in spec.description

    def test_tags(self) -> None:
        spec = _spec("==", "tags { no_opencl disable }", "input { 1 }")
        assert spec.tags == ["no_opencl", "disable"]

    def test_tags_may_span_lines(self) -> None:
        spec = _spec("==", "tags {", "  a", "  b }")
        assert spec.tags == ["a", "b"]

    def test_no_tags_is_empty(self) -> None:
        assert _spec("==", "input { 1 }").tags == []

    def test_unclosed_tags(self) -> None:
        with pytest.raises(ParseError):
            _spec("==", "tags { a b")

    def test_no_separator_gives_empty_run_cases(self) -> None:
        spec = read_test_spec("")
        assert spec.description == ""
        assert spec.action == RunCases(cases=[InputOutputs(entry_point="main", runs=[])])


# ###############
# Run Cases
# ###############


class TestRunCases:
    def test_entry_point(self) -> None:
        [cases] = _cases("==", "entry: sum_rows", "input { [1, 2] }")
        assert cases.entry_point == "sum_rows"

    def test_several_runs_are_numbered(self) -> None:
        [cases] = _cases("==", "input { 1 } output { 1 }", "input { 2 } output { 4 }", "input { 3 }")
        assert [run.description for run in cases.runs] == ['#0 ("1")', '#1 ("2")', '#2 ("3")']

    def test_run_without_output_succeeds_unchecked(self) -> None:
        [cases] = _cases("==", "input { 1 }")
        assert cases.runs[0].expected_result == Succeeds(values=None)

    def test_run_tags(self) -> None:
        [cases] = _cases("==", "compiled random input { 1 }", "input { 2 }")
        assert cases.runs[0].tags == ["compiled", "random"]
        assert cases.runs[1].tags == []

    def test_run_tag_without_input_fails(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _spec("==", "input { 1 }", "dangling")
        assert "'input'" in exc_info.value.reason

    def test_run_time_failure_with_pattern(self) -> None:
        [cases] = _cases("==", "input { 0 }", "error: division by zero", "input { 1 }")
        result = cases.runs[0].expected_result
        assert isinstance(result, RunTimeFailure)
        assert isinstance(result.error, ThisError)
        assert result.error.pattern == "division by zero"
        assert len(cases.runs) == 2

    def test_blank_error_is_any_error(self) -> None:
        [cases] = _cases("==", "input { 0 }", "error:   ", "input { 1 }")
        assert cases.runs[0].expected_result == RunTimeFailure(error=AnyError())
        assert len(cases.runs) == 2

    def test_blank_compile_error_is_any_error(self) -> None:
        spec = _spec("==", "error:")
        assert spec.action == CompileTimeFailure(error=AnyError())

    def test_error_pattern_spans_newlines(self) -> None:
        spec = _spec("==", "error: Index.*out of bounds")
        assert isinstance(spec.action, CompileTimeFailure)
        assert spec.action.error.matches("Index [3]\nout of bounds")

    def test_invalid_error_pattern(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _spec("==", "error: (unclosed")
        assert exc_info.value.reason.startswith("Invalid error pattern")
        assert exc_info.value.line == 2
        assert exc_info.value.column == 9

    def test_file_references(self) -> None:
        [cases] = _cases("==", "input @ data/in.txt", "output @ data/out.txt")
        run = cases.runs[0]
        assert run.input == FileReference(path="data/in.txt")
        assert run.expected_result == Succeeds(values=FileReference(path="data/out.txt"))
        assert run.description == "data/in.txt"


# ###############
# Value Blocks
# ###############


class TestValueBlocks:
    def test_nested_braces(self) -> None:
        [cases] = _cases("==", "input {{1,2},{3,4}}")
        run_input = cases.runs[0].input
        assert isinstance(run_input, LiteralValues)
        assert len(run_input.values) == 2

    def test_multi_line_block(self) -> None:
        [cases] = _cases("==", "input {", "  [1, 2,", "   3]", "}", "output { 6 }")
        run_input = cases.runs[0].input
        assert isinstance(run_input, LiteralValues)
        assert run_input.values[0] == ArrayValue(element_type=PrimitiveType.I32, shape=[3], data=[1, 2, 3])

    def test_unterminated_block(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _spec("==", "input {{1,2}")
        assert exc_info.value.reason == "Unterminated value block"
        assert (exc_info.value.line, exc_info.value.column) == (2, 8)

    def test_invalid_values_are_positioned_inside_block(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _spec("==", "input { 1 2x }")
        assert exc_info.value.reason.startswith("Invalid input values")
        assert (exc_info.value.line, exc_info.value.column) == (2, 12)

    def test_invalid_output_values(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _spec("==", "input { 1 }", "output { [1, }")
        assert exc_info.value.reason.startswith("Invalid output values")

    def test_missing_block(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _spec("==", "input 1")
        assert "'{'" in exc_info.value.reason
        assert "'@'" in exc_info.value.reason

    def test_long_input_description_is_truncated(self) -> None:
        numbers = ", ".join(str(n) for n in range(40))
        [cases] = _cases("==", f"input {{ [{numbers}] }}")
        description = cases.runs[0].description
        assert description.startswith('#0 ("[0, 1, 2')
        assert description.endswith('...")')
        assert len(description) == len('#0 ("') + 50 + len('...")')

    def test_several_values_are_joined_with_spaces(self) -> None:
        [cases] = _cases("==", "input { 1", "  true }")
        assert cases.runs[0].description == '#0 ("1 true")'


# ###############
# Structure Tests
# ###############


class TestStructureTests:
    def test_default_pipeline(self) -> None:
        spec = _spec("==", "input { 1 }", "structure { Screma 1 Map/Reduce 2 }")
        [structure] = spec.structure_tests
        assert structure.pipeline == StructurePipeline.SOACS
        assert structure.metrics == {"Screma": 1, "Map/Reduce": 2}

    @pytest.mark.parametrize(
        ("keyword", "pipeline"),
        [
            ("distributed", StructurePipeline.KERNELS),
            ("gpu", StructurePipeline.GPU),
            ("cpu", StructurePipeline.SEQUENTIAL_CPU),
        ],
    )
    def test_explicit_pipeline(self, keyword: str, pipeline: StructurePipeline) -> None:
        spec = _spec("==", f"structure {keyword} {{ SegMap 3 }}")
        assert spec.structure_tests[0].pipeline == pipeline

    def test_structure_tests_keep_declaration_order(self) -> None:
        spec = _spec("==", "error: nope", "structure gpu { A 1 }", "structure { B 2 }")
        assert [s.pipeline for s in spec.structure_tests] == [StructurePipeline.GPU, StructurePipeline.SOACS]

    def test_empty_metrics(self) -> None:
        spec = _spec("==", "structure { }")
        assert spec.structure_tests[0].metrics == {}

    def test_non_numeric_count(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _spec("==", "structure { Screma many }")
        assert "natural number" in exc_info.value.reason


# ###############
# Trailing Input
# ###############


class TestTrailingInput:
    def test_garbage_after_structure(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _spec("==", "structure { A 1 }", "}")
        assert "end of input" in exc_info.value.reason
        assert exc_info.value.line == 3

    def test_second_entry_in_primary_block_fails(self) -> None:
        with pytest.raises(ParseError):
            _spec("==", "input { 1 }", "entry: other")


# ###############
# Secondary Blocks
# ###############


class TestSecondaryBlocks:
    def test_read_input_outputs(self) -> None:
        cases = read_input_outputs(_block("==", "entry: other", "input { 2 }", "output { 3 }"))
        assert cases.entry_point == "other"
        assert len(cases.runs) == 1

    def test_description_is_discarded(self) -> None:
        cases = read_input_outputs(_block("More cases.", "==", "input { 2 }"))
        assert cases.entry_point == "main"
        assert cases.runs[0].description == '#0 ("2")'

    def test_secondary_block_cannot_declare_compile_error(self) -> None:
        with pytest.raises(ParseError):
            read_input_outputs(_block("==", "error: nope"))

    def test_source_name_in_error(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            read_input_outputs(_block("==", "input {"), source="prog.fut")
        assert exc_info.value.source == "prog.fut"
        assert str(exc_info.value).startswith("prog.fut, line 2")
