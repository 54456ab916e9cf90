# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for test specifications (test actions, run cases, values)."""

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
from futspec.model.values import (
    FLOAT_TYPES,
    INTEGER_TYPES,
    ArrayValue,
    PrimitiveType,
    ScalarValue,
    TupleValue,
    Value,
    pretty,
)

__all__ = [
    # Values
    "PrimitiveType",
    "INTEGER_TYPES",
    "FLOAT_TYPES",
    "ScalarValue",
    "ArrayValue",
    "TupleValue",
    "Value",
    "pretty",
    # Entities
    "DEFAULT_ENTRY_POINT",
    "AnyError",
    "ThisError",
    "ExpectedError",
    "LiteralValues",
    "FileReference",
    "Values",
    "Succeeds",
    "RunTimeFailure",
    "ExpectedResult",
    "TestRun",
    "InputOutputs",
    "CompileTimeFailure",
    "RunCases",
    "TestAction",
    "StructurePipeline",
    "StructureTest",
    "ProgramTest",
]
