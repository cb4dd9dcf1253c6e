"""sqlmarkup: SQL-markup template compiler for Python."""

from sqlmarkup._compile import compile_sql
from sqlmarkup.bind import Bind, BoundValue
from sqlmarkup.builder import BoundParameter, Builder, CompiledSQL
from sqlmarkup.exceptions import (
    BindArityMismatchError,
    EmptyInListError,
    InvalidBindShapeError,
    InvalidBindValueError,
    InvalidLabelError,
    MixedBindShapeError,
    MixedKeyShapeError,
    MixedPlaceholderStyleError,
    MultidimensionalBindError,
    ReservedPlaceholderError,
    SqlCompileError,
    SqlMarkupError,
    UnboundPlaceholderError,
)
from sqlmarkup.param_type import ParamType

__all__ = [
    "Bind",
    "BindArityMismatchError",
    "BoundParameter",
    "BoundValue",
    "Builder",
    "CompiledSQL",
    "EmptyInListError",
    "InvalidBindShapeError",
    "InvalidBindValueError",
    "InvalidLabelError",
    "MixedBindShapeError",
    "MixedKeyShapeError",
    "MixedPlaceholderStyleError",
    "MultidimensionalBindError",
    "ParamType",
    "ReservedPlaceholderError",
    "SqlCompileError",
    "SqlMarkupError",
    "UnboundPlaceholderError",
    "compile_sql",
]
