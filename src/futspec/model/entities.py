# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Test specification entities parsed from the leading comments of a program."""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

from futspec.model.values import Value

# ###############
# Public Interface
# ###############

DEFAULT_ENTRY_POINT = "main"


class AnyError(BaseModel):
    """Any failure is accepted."""

    kind: Literal["any"] = "any"

    def matches(self, message: str) -> bool:
        return True


class ThisError(BaseModel):
    """A failure whose message must match a regular expression.

    Attributes:
        pattern: The pattern text exactly as written after ``error:``.
        regex: The compiled pattern. ``.`` also matches newlines.
    """

    kind: Literal["this"] = "this"
    pattern: str
    regex: re.Pattern[str]

    @classmethod
    def from_pattern(cls, pattern: str) -> ThisError:
        """Compile *pattern* and wrap it.

        Raises:
            re.error: If *pattern* is not a valid regular expression.
        """
        return cls(pattern=pattern, regex=re.compile(pattern, re.DOTALL))

    def matches(self, message: str) -> bool:
        return self.regex.search(message) is not None


ExpectedError = Annotated[AnyError | ThisError, _Field(discriminator="kind")]


class LiteralValues(BaseModel):
    """Values written out literally inside a ``{ ... }`` block."""

    kind: Literal["literal"] = "literal"
    values: list[Value] = _Field(default_factory=list)


class FileReference(BaseModel):
    """Values stored in a data file, referenced with ``@ path``."""

    kind: Literal["file"] = "file"
    path: str


Values = Annotated[LiteralValues | FileReference, _Field(discriminator="kind")]


class Succeeds(BaseModel):
    """Execution succeeds, optionally producing exactly these values."""

    kind: Literal["succeeds"] = "succeeds"
    values: Values | None = None


class RunTimeFailure(BaseModel):
    """Execution fails at run time with the given error."""

    kind: Literal["runtime_failure"] = "runtime_failure"
    error: ExpectedError


ExpectedResult = Annotated[Succeeds | RunTimeFailure, _Field(discriminator="kind")]


class TestRun(BaseModel):
    """One concrete run of an entry point."""

    __test__ = False

    tags: list[str] = _Field(default_factory=list)
    input: Values
    expected_result: ExpectedResult
    description: str


class InputOutputs(BaseModel):
    """The run cases of a single entry point."""

    entry_point: str = DEFAULT_ENTRY_POINT
    runs: list[TestRun] = _Field(default_factory=list)


class CompileTimeFailure(BaseModel):
    """The program is expected to be rejected by the compiler."""

    kind: Literal["compile_failure"] = "compile_failure"
    error: ExpectedError


class RunCases(BaseModel):
    """The program is expected to compile; its entry points are run."""

    kind: Literal["run_cases"] = "run_cases"
    cases: list[InputOutputs] = _Field(default_factory=list)


TestAction = Annotated[CompileTimeFailure | RunCases, _Field(discriminator="kind")]


class StructurePipeline(Enum):
    """Compilation pipeline after which structure metrics are taken."""

    SOACS = "soacs"
    KERNELS = "kernels"
    GPU = "gpu"
    SEQUENTIAL_CPU = "sequential_cpu"


class StructureTest(BaseModel):
    """Expected counts of constructs in the program after a pipeline."""

    pipeline: StructurePipeline = StructurePipeline.SOACS
    metrics: dict[str, int] = _Field(default_factory=dict)


class ProgramTest(BaseModel):
    """The complete test specification of one program."""

    description: str = ""
    tags: list[str] = _Field(default_factory=list)
    action: TestAction
    structure_tests: list[StructureTest] = _Field(default_factory=list)
