# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reader for the textual value syntax used in input and output blocks.

A value text is a sequence of values separated by whitespace (and optionally
commas).  ``--`` starts a comment that runs to the end of the line.

Examples::

    10  3u8  -2.5f32  true  f64.nan
    [[1, 2], [3, 4]]
    empty([0][3]i64)
    {1, [2.0, 3.0]}
"""

from collections.abc import Callable

from futspec.model.values import (
    FLOAT_TYPES,
    INTEGER_TYPES,
    ArrayValue,
    PrimitiveType,
    ScalarValue,
    TupleValue,
    Value,
)
from futspec.parser.scanner import Scanner

# ###############
# Public Interface
# ###############


class ValuesError(Exception):
    """Raised when value text is malformed.

    Attributes:
        reason: Description of the problem without position information.
        line: 1-based line number within the value text.
        column: 1-based column number within the value text.
    """

    def __init__(self, reason: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {reason}")
        self.reason = reason
        self.line = line
        self.column = column


def read_values(text: str) -> list[Value]:
    """Read every value in *text*.

    Raises:
        ValuesError: If *text* is not a valid sequence of values.
    """
    reader = _ValueReader(text)
    try:
        return reader.read_all()
    except RecursionError:
        raise reader.nesting_error() from None


def values_from_text(source_name: str, text: str) -> list[Value]:
    """Like :func:`read_values`, naming *source_name* in the error message."""
    try:
        return read_values(text)
    except ValuesError as exc:
        raise ValuesError(f"Cannot parse values from {source_name}: {exc.reason}", exc.line, exc.column) from exc


# ################
# Implementation
# ################

_INTEGER_RANGES: dict[PrimitiveType, tuple[int, int]] = {
    PrimitiveType.I8: (-(2**7), 2**7 - 1),
    PrimitiveType.I16: (-(2**15), 2**15 - 1),
    PrimitiveType.I32: (-(2**31), 2**31 - 1),
    PrimitiveType.I64: (-(2**63), 2**63 - 1),
    PrimitiveType.U8: (0, 2**8 - 1),
    PrimitiveType.U16: (0, 2**16 - 1),
    PrimitiveType.U32: (0, 2**32 - 1),
    PrimitiveType.U64: (0, 2**64 - 1),
}


class _ValueReader:
    """Recursive-descent reader producing Value models."""

    def __init__(self, text: str) -> None:
        self._scan = Scanner(text)

    def read_all(self) -> list[Value]:
        values: list[Value] = []
        self._skip()
        while not self._scan.at_end():
            values.append(self._value())
            self._skip()
            if self._scan.current() == ",":
                self._scan.advance()
                self._skip()
        return values

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _skip(self) -> None:
        """Skip whitespace and line comments."""
        while True:
            self._scan.skip_spaces()
            if self._scan.current() == "-" and self._scan.peek() == "-":
                self._scan.rest_of_line()
            else:
                return

    def _fail(self, reason: str, position: tuple[int, int] | None = None) -> ValuesError:
        line, column = position if position is not None else self._scan.position
        return ValuesError(reason, line, column)

    def nesting_error(self) -> ValuesError:
        """Error reported when arrays or tuples nest deeper than the interpreter allows."""
        return self._fail("Value nesting too deep")

    def _expect_char(self, ch: str) -> None:
        if self._scan.current() != ch:
            found = repr(self._scan.current()) if not self._scan.at_end() else "end of input"
            raise self._fail(f"Expected {ch!r}, got {found}")
        self._scan.advance()
        self._skip()

    def _take_while(self, predicate: Callable[[str], bool]) -> str:
        chars: list[str] = []
        while not self._scan.at_end() and predicate(self._scan.current()):
            chars.append(self._scan.advance())
        return "".join(chars)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _value(self) -> Value:
        ch = self._scan.current()
        if not ch:
            raise self._fail("Unexpected end of input, expected a value")
        if ch == "[":
            return self._array()
        if ch == "{":
            return self._tuple()
        if ch.isdigit() or ch in "-.":
            return self._number()
        if ch.isalpha():
            return self._named()
        raise self._fail(f"Unexpected character: {ch!r}")

    def _named(self) -> Value:
        start = self._scan.position
        name = self._take_while(lambda c: c.isalnum() or c in "_.")
        if name == "true":
            return ScalarValue(type=PrimitiveType.BOOL, value=True)
        if name == "false":
            return ScalarValue(type=PrimitiveType.BOOL, value=False)
        if name == "empty":
            return self._empty(start)
        return self._special_float(name, negative=False, start=start)

    def _special_float(self, name: str, negative: bool, start: tuple[int, int]) -> ScalarValue:
        prim_name, _, which = name.partition(".")
        try:
            prim = PrimitiveType(prim_name)
        except ValueError:
            raise self._fail(f"Unknown value: {name!r}", start) from None
        if prim not in FLOAT_TYPES or which not in ("nan", "inf"):
            raise self._fail(f"Unknown value: {name!r}", start)
        value = float(which)
        return ScalarValue(type=prim, value=-value if negative else value)

    def _number(self) -> ScalarValue:
        start = self._scan.position
        chars: list[str] = []
        if self._scan.current() == "-":
            chars.append(self._scan.advance())
            if self._scan.current().isalpha():
                name = self._take_while(lambda c: c.isalnum() or c in "_.")
                return self._special_float(name, negative=True, start=start)
        chars.append(self._take_while(str.isdigit))
        is_float = False
        if self._scan.current() == "." and self._scan.peek().isdigit():
            is_float = True
            chars.append(self._scan.advance())
            chars.append(self._take_while(str.isdigit))
        if self._scan.current() in ("e", "E") and (self._scan.peek().isdigit() or self._scan.peek() in ("+", "-")):
            is_float = True
            chars.append(self._scan.advance())
            if self._scan.current() in ("+", "-"):
                chars.append(self._scan.advance())
            exponent = self._take_while(str.isdigit)
            if not exponent:
                raise self._fail("Missing exponent digits")
            chars.append(exponent)
        text = "".join(chars)
        if not any(c.isdigit() for c in text):
            raise self._fail(f"Malformed number: {text!r}", start)

        suffix = self._take_while(str.isalnum)
        if suffix:
            try:
                prim = PrimitiveType(suffix)
            except ValueError:
                raise self._fail(f"Unknown type suffix: {suffix!r}", start) from None
            if prim == PrimitiveType.BOOL:
                raise self._fail(f"Unknown type suffix: {suffix!r}", start)
        else:
            prim = PrimitiveType.F64 if is_float else PrimitiveType.I32

        if prim in INTEGER_TYPES:
            if is_float:
                raise self._fail(f"Decimal literal {text!r} cannot have type {prim.value}", start)
            value = int(text)
            low, high = _INTEGER_RANGES[prim]
            if not low <= value <= high:
                raise self._fail(f"Literal {text} out of range for {prim.value}", start)
            return ScalarValue(type=prim, value=value)
        return ScalarValue(type=prim, value=float(text))

    def _array(self) -> ArrayValue:
        start = self._scan.position
        self._expect_char("[")
        if self._scan.current() == "]":
            raise self._fail("Empty arrays must be written as empty(...)", start)
        elements: list[Value] = []
        while True:
            elements.append(self._value())
            self._skip()
            if self._scan.current() == ",":
                self._expect_char(",")
                continue
            self._expect_char("]")
            break
        return self._regular_array(elements, start)

    def _regular_array(self, elements: list[Value], start: tuple[int, int]) -> ArrayValue:
        first = elements[0]
        if isinstance(first, ScalarValue):
            if not all(isinstance(e, ScalarValue) and e.type == first.type for e in elements):
                raise self._fail("Array elements must all have the same type", start)
            return ArrayValue(element_type=first.type, shape=[len(elements)], data=[e.value for e in elements])
        if isinstance(first, ArrayValue):
            data: list[bool | int | float] = []
            for e in elements:
                if not isinstance(e, ArrayValue) or e.element_type != first.element_type or e.shape != first.shape:
                    raise self._fail("Irregular array: rows differ in type or shape", start)
                data.extend(e.data)
            return ArrayValue(element_type=first.element_type, shape=[len(elements), *first.shape], data=data)
        raise self._fail("Arrays of tuples are not supported", start)

    def _tuple(self) -> TupleValue:
        self._expect_char("{")
        elements: list[Value] = []
        while self._scan.current() != "}":
            elements.append(self._value())
            self._skip()
            if self._scan.current() == ",":
                self._expect_char(",")
            elif self._scan.current() != "}":
                found = repr(self._scan.current()) if not self._scan.at_end() else "end of input"
                raise self._fail(f"Expected ',' or '}}', got {found}")
        self._expect_char("}")
        return TupleValue(elements=elements)

    def _empty(self, start: tuple[int, int]) -> ArrayValue:
        self._skip()
        self._expect_char("(")
        shape: list[int] = []
        while self._scan.current() == "[":
            self._expect_char("[")
            digits = self._take_while(str.isdigit)
            if not digits:
                raise self._fail("Expected a dimension size")
            shape.append(int(digits))
            self._skip()
            self._expect_char("]")
        if not shape:
            raise self._fail("Expected at least one dimension in empty(...)")
        type_start = self._scan.position
        type_name = self._take_while(str.isalnum)
        try:
            prim = PrimitiveType(type_name)
        except ValueError:
            raise self._fail(f"Unknown element type: {type_name!r}", type_start) from None
        self._skip()
        self._expect_char(")")
        if 0 not in shape:
            raise self._fail("An empty array must have a zero-sized dimension", start)
        return ArrayValue(element_type=prim, shape=shape)
