# Copyright 2026 futspec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Concrete program values appearing in input and output blocks."""

from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveType(Enum):
    """Primitive element types of Futhark values."""

    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F16 = "f16"
    F32 = "f32"
    F64 = "f64"
    BOOL = "bool"


INTEGER_TYPES: frozenset[PrimitiveType] = frozenset(
    {
        PrimitiveType.I8,
        PrimitiveType.I16,
        PrimitiveType.I32,
        PrimitiveType.I64,
        PrimitiveType.U8,
        PrimitiveType.U16,
        PrimitiveType.U32,
        PrimitiveType.U64,
    }
)

FLOAT_TYPES: frozenset[PrimitiveType] = frozenset({PrimitiveType.F16, PrimitiveType.F32, PrimitiveType.F64})


class ScalarValue(BaseModel):
    """A single primitive value."""

    kind: Literal["scalar"] = "scalar"
    type: PrimitiveType
    value: bool | int | float


class ArrayValue(BaseModel):
    """A regular multi-dimensional array of primitive values.

    Attributes:
        element_type: Type shared by every element.
        shape: Size of each dimension, outermost first.
        data: Elements in row-major order; ``len(data)`` is the product of ``shape``.
    """

    kind: Literal["array"] = "array"
    element_type: PrimitiveType
    shape: list[int]
    data: list[bool | int | float] = _Field(default_factory=list)


class TupleValue(BaseModel):
    """A brace-delimited tuple of values."""

    kind: Literal["tuple"] = "tuple"
    elements: list[Value] = _Field(default_factory=list)


Value = Annotated[ScalarValue | ArrayValue | TupleValue, _Field(discriminator="kind")]


def pretty(value: Value) -> str:
    """Render a value in the textual value syntax.

    Default-typed literals (``i32`` integers and ``f64`` floats) are rendered
    without a type suffix, so ``pretty`` of the value read from ``10`` is ``"10"``.
    """
    if isinstance(value, ScalarValue):
        return _pretty_scalar(value.type, value.value)
    if isinstance(value, TupleValue):
        return "{" + ", ".join(pretty(v) for v in value.elements) + "}"
    if 0 in value.shape:
        dims = "".join(f"[{d}]" for d in value.shape)
        return f"empty({dims}{value.element_type.value})"
    return _pretty_array(value.element_type, value.shape, value.data)


# ################
# Implementation
# ################


def _pretty_scalar(prim: PrimitiveType, v: bool | int | float) -> str:
    if prim == PrimitiveType.BOOL:
        return "true" if v else "false"
    if prim in FLOAT_TYPES:
        f = float(v)
        if math.isnan(f):
            return f"{prim.value}.nan"
        if math.isinf(f):
            return f"{prim.value}.inf" if f > 0 else f"-{prim.value}.inf"
        text = repr(f)
    else:
        text = str(int(v))
    if prim in (PrimitiveType.I32, PrimitiveType.F64):
        return text
    return text + prim.value


def _pretty_array(prim: PrimitiveType, shape: list[int], data: list[bool | int | float]) -> str:
    if len(shape) == 1:
        return "[" + ", ".join(_pretty_scalar(prim, v) for v in data) + "]"
    stride = len(data) // shape[0]
    rows = [_pretty_array(prim, shape[1:], data[i * stride : (i + 1) * stride]) for i in range(shape[0])]
    return "[" + ", ".join(rows) + "]"


TupleValue.model_rebuild()
