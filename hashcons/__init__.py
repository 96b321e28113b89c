"""
hashcons: Common Subexpression Elimination by Structural Hash-Consing
=====================================================================

Parses tree-shaped expressions such as ``f(g(a,b),g(a,b))`` and rewrites
each one so that every repeated subtree becomes a reference to its first
occurrence in pre-order.

Core Components:
    - frontend: name classification and the predictive parser
    - ir: the immutable expression tree with structural equality/hash
    - compiler: the CSE pass and the printer
    - runtime: the line-oriented stream pipeline

Usage:
    >>> import hashcons
    >>> tree = hashcons.parse("f(f(a,b),f(a,b))")
    >>> hashcons.render(hashcons.eliminate_common_subexpressions(tree))
    'f(f(a,b),2)'

    $ printf '1\\nf(a,f(a,a))\\n' | python -m hashcons
    f(a,f(2,2))
"""

__version__ = "1.0.0"

from hashcons.frontend.names import is_letter
from hashcons.frontend.parser import Parser, ParseError, parse
from hashcons.ir.expr import Expr, Application, Variable, Substitution
from hashcons.compiler.cse import (
    CommonSubexpressionEliminator,
    DedupTable,
    InvariantViolation,
    eliminate_common_subexpressions,
)
from hashcons.compiler.printer import render
from hashcons.runtime.pipeline import LineProcessor, PipelineStats, process_line

__all__ = [
    'is_letter',
    'Parser',
    'ParseError',
    'parse',
    'Expr',
    'Application',
    'Variable',
    'Substitution',
    'CommonSubexpressionEliminator',
    'DedupTable',
    'InvariantViolation',
    'eliminate_common_subexpressions',
    'render',
    'LineProcessor',
    'PipelineStats',
    'process_line',
]
