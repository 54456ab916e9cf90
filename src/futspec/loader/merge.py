# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Combination of a program's primary test block with its secondary blocks."""

from futspec.model.entities import CompileTimeFailure, InputOutputs, ProgramTest, RunCases

# ###############
# Public Interface
# ###############


class SpecError(Exception):
    """Raised when a program's test specification cannot be loaded.

    Covers unreadable files, missing paths and test blocks that contradict
    each other.  Syntax errors are reported as ParseError instead.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


def add_input_outputs(test: ProgramTest, cases: InputOutputs) -> ProgramTest:
    """Return a copy of *test* with *cases* appended to its run cases.

    Raises:
        SpecError: If *test* expects a compilation failure, which leaves
            nothing to run.
    """
    if isinstance(test.action, CompileTimeFailure):
        raise SpecError("Secondary test block provided, but primary test block specifies compilation error.")
    action = RunCases(cases=[*test.action.cases, cases])
    return test.model_copy(update={"action": action})
