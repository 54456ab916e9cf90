# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Character-level scanning primitives shared by the test specification parsers.

The specification language has no fixed token stream: error patterns extend to
the end of a line, value blocks are raw brace-balanced text and descriptions
are free text. Parsers therefore drive a :class:`Scanner` directly instead of
consuming pre-built tokens.
"""

from collections.abc import Callable

# ###############
# Public Interface
# ###############

DESCRIPTION_SEPARATOR = "=="


class ParseError(Exception):
    """Raised when a test specification is syntactically invalid.

    Attributes:
        reason: Description of the problem without position information.
        line: 1-based line number of the error.
        column: 1-based column number of the error.
        source: Name of the parsed source, usually a file path.
    """

    def __init__(self, reason: str, line: int, column: int, source: str = "<string>") -> None:
        super().__init__(f"{source}, line {line}, column {column}: {reason}")
        self.reason = reason
        self.line = line
        self.column = column
        self.source = source


class Scanner:
    """A cursor over source text with line and column tracking.

    Methods that recognise an optional construct return a falsy value without
    consuming input when the construct is absent, and remember what was
    attempted.  :meth:`error` uses those attempts to report every alternative
    that would have been accepted at the failing position.
    """

    def __init__(self, source: str, source_name: str = "<string>") -> None:
        self._source = source
        self._source_name = source_name
        self._pos = 0
        self._line = 1
        self._column = 1
        self._expected: list[str] = []
        self._expected_at = -1

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    @property
    def position(self) -> tuple[int, int]:
        """The current (line, column), both 1-based."""
        return self._line, self._column

    def at_end(self) -> bool:
        return self._pos >= len(self._source)

    def current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def peek(self) -> str:
        """Return the character one position ahead, or '' at end of input."""
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _advance_to(self, end: int) -> None:
        while self._pos < end:
            self.advance()

    # ------------------------------------------------------------------
    # Whitespace
    # ------------------------------------------------------------------

    def skip_spaces(self) -> None:
        """Skip all whitespace, including line breaks."""
        while self._pos < len(self._source) and self._source[self._pos].isspace():
            self.advance()

    def skip_blanks(self) -> None:
        """Skip spaces and tabs on the current line."""
        while self.current() in (" ", "\t"):
            self.advance()

    # ------------------------------------------------------------------
    # Lexemes
    # ------------------------------------------------------------------

    def keyword(self, text: str, skip_after: bool = True) -> bool:
        """Consume *text*, and any following whitespace, if it comes next.

        No word boundary is required after *text*.
        """
        if not self._source.startswith(text, self._pos):
            self._note(repr(text))
            return False
        self._advance_to(self._pos + len(text))
        if skip_after:
            self.skip_spaces()
        return True

    def check(self, text: str) -> bool:
        """Return True if *text* comes next, without consuming it."""
        if self._source.startswith(text, self._pos):
            return True
        self._note(repr(text))
        return False

    def expect_keyword(self, text: str) -> None:
        if not self.keyword(text):
            raise self.error()

    def word(
        self,
        predicate: Callable[[str], bool],
        what: str,
        exclude: frozenset[str] = frozenset(),
    ) -> str:
        """Consume a non-empty run of characters satisfying *predicate*.

        Returns '' without consuming anything when the run is empty or is
        one of the *exclude* words.
        """
        end = self._pos
        while end < len(self._source) and predicate(self._source[end]):
            end += 1
        text = self._source[self._pos : end]
        if not text or text in exclude:
            self._note(what)
            return ""
        self._advance_to(end)
        self.skip_spaces()
        return text

    def natural(self) -> int:
        """Consume an unsigned decimal number."""
        digits = self.word(lambda c: "0" <= c <= "9", "natural number")
        if not digits:
            raise self.error()
        return int(digits)

    def rest_of_line(self) -> str:
        """Consume and return the text up to the end of the line.

        The line break itself is consumed but not returned.
        """
        end = self._source.find("\n", self._pos)
        if end == -1:
            end = len(self._source)
        text = self._source[self._pos : end]
        self._advance_to(min(end + 1, len(self._source)))
        return text

    def next_word(self, what: str) -> str:
        """Consume a run of non-whitespace characters and the whitespace after it."""
        word = self.word(lambda c: not c.isspace(), what)
        if not word:
            raise self.error()
        return word

    def balanced_block(self) -> tuple[str, int, int]:
        """Consume a ``{ ... }`` block whose content may contain nested braces.

        Returns:
            The raw content between the outer braces (leading whitespace
            dropped) and the 1-based line and column where it starts.

        Raises:
            ParseError: If the closing brace is missing.
        """
        open_line, open_column = self.position
        self.expect_keyword("{")
        line, column = self.position
        start = self._pos
        depth = 0
        while True:
            if self.at_end():
                raise ParseError("Unterminated value block", open_line, open_column, self._source_name)
            ch = self.current()
            if ch == "}":
                if depth == 0:
                    break
                depth -= 1
            elif ch == "{":
                depth += 1
            self.advance()
        content = self._source[start : self._pos]
        self.advance()  # closing }
        self.skip_spaces()
        return content, line, column

    def description(self) -> str:
        """Consume free text up to and including a separator line.

        The separator is :data:`DESCRIPTION_SEPARATOR` followed only by blanks
        up to the end of its line.  Without a separator, the whole remaining
        input is the description.
        """
        start = self._pos
        while not self.at_end():
            if self._source.startswith(DESCRIPTION_SEPARATOR, self._pos) and self._blank_until_eol(
                self._pos + len(DESCRIPTION_SEPARATOR)
            ):
                text = self._source[start : self._pos]
                self._advance_to(self._pos + len(DESCRIPTION_SEPARATOR))
                self.rest_of_line()
                self.skip_spaces()
                return text.strip()
            self.advance()
        return self._source[start:].strip()

    def expect_end(self) -> None:
        if not self.at_end():
            self._note("end of input")
            raise self.error()

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def error(self, reason: str | None = None, line: int | None = None, column: int | None = None) -> ParseError:
        """Build a ParseError at the current position (or the given one).

        Without *reason*, the message names the unexpected input and every
        alternative attempted at this position.
        """
        if reason is None:
            found = "end of input" if self.at_end() else repr(self.current())
            reason = f"Unexpected {found}"
            if self._expected_at == self._pos and self._expected:
                reason += f"; expected {_join_alternatives(self._expected)}"
        if line is None or column is None:
            line, column = self.position
        return ParseError(reason, line, column, self._source_name)

    # ------------------------------------------------------------------
    # Implementation helpers
    # ------------------------------------------------------------------

    def _note(self, what: str) -> None:
        """Record that *what* was attempted at the current position."""
        if self._pos > self._expected_at:
            self._expected = []
            self._expected_at = self._pos
        if what not in self._expected:
            self._expected.append(what)

    def _blank_until_eol(self, index: int) -> bool:
        while index < len(self._source) and self._source[index] != "\n":
            if not self._source[index].isspace():
                return False
            index += 1
        return True


# ################
# Implementation
# ################


def _join_alternatives(items: list[str]) -> str:
    if len(items) == 1:
        return items[0]
    return ", ".join(items[:-1]) + " or " + items[-1]
