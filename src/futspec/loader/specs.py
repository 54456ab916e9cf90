# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading of test specifications from programs on disk.

A test program is an ordinary ``.fut`` source file whose comments contain
test blocks.  The first test block is the primary block and decides the
program's action; every later block adds the run cases of one more entry
point::

    -- Sums and products.
    -- ==
    -- input { [1, 2, 3] }
    -- output { 6 }

    -- ==
    -- entry: prod
    -- input { [1, 2, 3] }
    -- output { 6 }

A program without test blocks has an empty specification.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from futspec.loader.blocks import fix_position, select_test_blocks
from futspec.loader.merge import SpecError, add_input_outputs
from futspec.model.entities import LiteralValues, ProgramTest, Values
from futspec.model.values import Value, pretty
from futspec.parser.scanner import ParseError
from futspec.parser.spec import read_input_outputs, read_test_spec
from futspec.parser.values import values_from_text

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

DEFAULT_EXTENSION = ".fut"


def spec_from_text(text: str, source: str = "<string>") -> ProgramTest:
    """Parse the test specification embedded in program text.

    Args:
        text: The full program text.
        source: Name used in error messages, usually the file path.

    Returns:
        The merged ProgramTest of all test blocks in *text*.

    Raises:
        ParseError: If a test block is invalid.  The position refers to the
            line and column in *text*.
        SpecError: If secondary blocks follow a compile-failure block.
    """
    blocks = select_test_blocks(text)
    logger.debug("%s: found %d test block(s)", source, len(blocks))
    if not blocks:
        return read_test_spec("", source)

    first_line, first_block = blocks[0]
    try:
        test = read_test_spec(first_block, source)
    except ParseError as exc:
        raise fix_position(exc, first_line) from None

    for lineno, block in blocks[1:]:
        try:
            cases = read_input_outputs(block, source)
        except ParseError as exc:
            raise fix_position(exc, lineno) from None
        try:
            test = add_input_outputs(test, cases)
        except SpecError as exc:
            raise SpecError(f"{source}: {exc}") from None
    return test


def spec_from_file(path: Path) -> ProgramTest:
    """Read and parse the test specification of the program at *path*.

    Raises:
        SpecError: If the file cannot be read, or its blocks are inconsistent.
        ParseError: If a test block is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecError(f"Cannot read test program '{path}': {exc}") from exc
    return spec_from_text(text, source=str(path))


def find_programs(
    path: Path,
    extension: str = DEFAULT_EXTENSION,
    exclude: Iterable[str] = (),
) -> list[Path]:
    """Return the test programs at *path*.

    A file is returned as-is.  A directory is searched recursively for files
    ending in *extension*, skipping subdirectories named in *exclude*.

    Raises:
        SpecError: If *path* does not exist.
    """
    if path.is_file():
        return [path]
    if not path.is_dir():
        raise SpecError(f"No such file or directory: '{path}'")

    excluded = set(exclude)
    programs = [
        candidate
        for candidate in sorted(path.rglob(f"*{extension}"))
        if candidate.is_file() and not excluded.intersection(candidate.relative_to(path).parts[:-1])
    ]
    logger.debug("%s: found %d program(s) with extension %s", path, len(programs), extension)
    return programs


def specs_from_path(
    path: Path,
    extension: str = DEFAULT_EXTENSION,
    exclude: Iterable[str] = (),
) -> list[tuple[Path, ProgramTest]]:
    """Load the specifications of every test program at *path*."""
    return [(program, spec_from_file(program)) for program in find_programs(path, extension, exclude)]


def specs_from_paths(
    paths: Iterable[Path],
    extension: str = DEFAULT_EXTENSION,
    exclude: Iterable[str] = (),
) -> list[tuple[Path, ProgramTest]]:
    """Load the specifications of every test program at each of *paths*, in order."""
    excluded = list(exclude)
    result: list[tuple[Path, ProgramTest]] = []
    for path in paths:
        result.extend(specs_from_path(path, extension, excluded))
    return result


def get_values(directory: Path, values: Values) -> list[Value]:
    """Return the concrete values of a Values specification.

    File references are resolved relative to *directory*, normally the
    directory of the test program.

    Raises:
        SpecError: If a referenced file cannot be read.
        ValuesError: If a referenced file does not contain valid values.
    """
    if isinstance(values, LiteralValues):
        return list(values.values)
    data_file = directory / values.path
    try:
        text = data_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecError(f"Cannot read data file '{data_file}': {exc}") from exc
    return values_from_text(str(data_file), text)


def get_values_bytes(directory: Path, values: Values) -> bytes:
    """Return the textual form of a Values specification as bytes.

    Literal values are rendered one per line.  Referenced files are returned
    unchanged, so nothing guarantees that the result is readable as values.

    Raises:
        SpecError: If a referenced file cannot be read.
    """
    if isinstance(values, LiteralValues):
        return "".join(pretty(v) + "\n" for v in values.values).encode("utf-8")
    data_file = directory / values.path
    try:
        return data_file.read_bytes()
    except OSError as exc:
        raise SpecError(f"Cannot read data file '{data_file}': {exc}") from exc
