"""Tree rewriting and rendering passes."""

from hashcons.compiler.cse import (
    CommonSubexpressionEliminator,
    DedupTable,
    InvariantViolation,
    eliminate_common_subexpressions,
)
from hashcons.compiler.printer import render

__all__ = [
    'CommonSubexpressionEliminator',
    'DedupTable',
    'InvariantViolation',
    'eliminate_common_subexpressions',
    'render',
]
