# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Extraction of test blocks from the comments of a program."""

from futspec.parser.scanner import DESCRIPTION_SEPARATOR, ParseError

# ###############
# Public Interface
# ###############

COMMENT_PREFIX = "--"


def comment_blocks(text: str) -> list[tuple[int, list[str]]]:
    """Split *text* into maximal runs of consecutive comment lines.

    Returns:
        One ``(line_number, lines)`` pair per run, where *line_number* is the
        0-based line of the run's first line and *lines* have the comment
        prefix removed.
    """
    # Only "\n" ends a line.
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    blocks: list[tuple[int, list[str]]] = []
    i = 0
    while i < len(lines):
        if not lines[i].startswith(COMMENT_PREFIX):
            i += 1
            continue
        start = i
        block: list[str] = []
        while i < len(lines) and lines[i].startswith(COMMENT_PREFIX):
            block.append(lines[i][len(COMMENT_PREFIX) :])
            i += 1
        blocks.append((start, block))
    return blocks


def is_test_block(lines: list[str]) -> bool:
    """Return True if a line of the block is a description separator."""
    return any(line.startswith(DESCRIPTION_SEPARATOR) or line.startswith(" " + DESCRIPTION_SEPARATOR) for line in lines)


def select_test_blocks(text: str) -> list[tuple[int, str]]:
    """Return the comment blocks of *text* that contain a test specification.

    Each block is rejoined into newline-terminated text, ready for parsing.
    Ordinary comment blocks are dropped.
    """
    return [(n, "".join(line + "\n" for line in block)) for n, block in comment_blocks(text) if is_test_block(block)]


def fix_position(error: ParseError, lineno: int) -> ParseError:
    """Map an error in a block's text to its position in the original file.

    Args:
        error: Error whose position is relative to the stripped block text.
        lineno: 0-based line of the block's first line in the file.
    """
    return ParseError(
        error.reason,
        error.line + lineno,
        error.column + len(COMMENT_PREFIX),
        error.source,
    )
