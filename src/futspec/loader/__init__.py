# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading test specifications from program files and directories."""

from futspec.loader.blocks import COMMENT_PREFIX, comment_blocks, fix_position, is_test_block, select_test_blocks
from futspec.loader.merge import SpecError, add_input_outputs
from futspec.loader.specs import (
    DEFAULT_EXTENSION,
    find_programs,
    get_values,
    get_values_bytes,
    spec_from_file,
    spec_from_text,
    specs_from_path,
    specs_from_paths,
)

__all__ = [
    "COMMENT_PREFIX",
    "DEFAULT_EXTENSION",
    "SpecError",
    "add_input_outputs",
    "comment_blocks",
    "find_programs",
    "fix_position",
    "get_values",
    "get_values_bytes",
    "is_test_block",
    "select_test_blocks",
    "spec_from_file",
    "spec_from_text",
    "specs_from_path",
    "specs_from_paths",
]
