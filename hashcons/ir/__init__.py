"""Expression tree types."""

from hashcons.ir.expr import (
    Expr,
    Application,
    Variable,
    Substitution,
    combine_hashes,
)

__all__ = [
    'Expr',
    'Application',
    'Variable',
    'Substitution',
    'combine_hashes',
]
