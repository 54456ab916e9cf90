# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parsers for test specification blocks and value literals."""

from futspec.parser.scanner import DESCRIPTION_SEPARATOR, ParseError, Scanner
from futspec.parser.spec import read_input_outputs, read_test_spec
from futspec.parser.values import ValuesError, read_values, values_from_text

__all__ = [
    "DESCRIPTION_SEPARATOR",
    "ParseError",
    "Scanner",
    "ValuesError",
    "read_input_outputs",
    "read_test_spec",
    "read_values",
    "values_from_text",
]
