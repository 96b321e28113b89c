"""
Common Subexpression Elimination
================================

Rewrites an expression tree so that every subtree structurally equal
to one visited earlier becomes a Substitution carrying the earlier
subtree's replacement id.

Traversal is pre-order (node, then left, then right). A node seen for
the first time gets the next id, starting at 1, and is then expanded.
A repeated node collapses to ``Substitution(id)`` on the spot: its
children are not visited and consume no ids.

Before:
    f(f(a,b),f(a,b))
        f(f(a,b),f(a,b)) -> 1
        f(a,b)           -> 2
        a                -> 3
        b                -> 4
        f(a,b)           -> repeat of 2

After:
    f(f(a,b),2)

The table is keyed on the nodes exactly as parsed, never on their
rewritten form, so later raw subtrees still find their first
occurrence.

Pending visits sit on a work stack rather than the call stack, so tree
depth is limited by memory only.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from hashcons.ir.expr import Application, Expr, Substitution, Variable

logger = logging.getLogger(__name__)


class InvariantViolation(RuntimeError):
    """A Substitution node reached the CSE engine as input."""


@dataclass
class DedupTable:
    """Per-tree mapping from first-seen subtrees to replacement ids."""
    entries: Dict[Expr, int] = field(default_factory=dict)
    next_id: int = 1

    def lookup(self, node: Expr) -> Optional[int]:
        return self.entries.get(node)

    def assign(self, node: Expr) -> int:
        repl = self.next_id
        self.entries[node] = repl
        self.next_id += 1
        return repl

    def __len__(self) -> int:
        return len(self.entries)


class CommonSubexpressionEliminator:
    """
    Single-pass CSE over one expression tree.

    Each ``run()`` starts from an empty DedupTable; the table of the
    last run stays available as ``self.table`` for inspection.

    Usage:
        >>> from hashcons.frontend.parser import parse
        >>> cse = CommonSubexpressionEliminator()
        >>> cse.run(parse("f(a,a)"))
        Application(name='f', left=Variable(name='a'), right=Substitution(id=2))
    """

    def __init__(self, stats: Optional[dict] = None):
        self.stats = stats if stats is not None else defaultdict(int)
        self.table = DedupTable()
        self._work: List[Tuple[Callable[[Expr], None], Expr]] = []
        self._results: List[Expr] = []

    def run(self, tree: Expr) -> Expr:
        self.table = DedupTable()
        self._work = [(self.visit, tree)]
        self._results = []
        while self._work:
            action, node = self._work.pop()
            action(node)
        result = self._results.pop()
        logger.debug(
            f"CSE assigned {len(self.table)} ids over {tree.size()} nodes"
        )
        return result

    def visit(self, node: Expr):
        if isinstance(node, Substitution):
            self.visit_Substitution(node)

        repl = self.table.lookup(node)
        if repl is not None:
            self.stats['substitutions'] += 1
            self.stats['nodes_elided'] += node.size() - 1
            self._results.append(Substitution(repl))
            return

        if isinstance(node, Application):
            self.table.assign(node)
            self.stats['ids_assigned'] += 1
            self.visit_Application(node)
        elif isinstance(node, Variable):
            self.table.assign(node)
            self.stats['ids_assigned'] += 1
            self._results.append(self.visit_Variable(node))
        else:
            raise TypeError(f"not an expression node: {node!r}")

    def visit_Application(self, node: Application):
        # Popped in reverse: left subtree, right subtree, then the rebuild
        self._work.append((self._rebuild_Application, node))
        self._work.append((self.visit, node.right))
        self._work.append((self.visit, node.left))

    def _rebuild_Application(self, node: Application):
        right = self._results.pop()
        left = self._results.pop()
        self._results.append(Application(node.name, left, right))

    def visit_Variable(self, node: Variable) -> Expr:
        return Variable(node.name)

    def visit_Substitution(self, node: Substitution):
        raise InvariantViolation(
            f"Substitution({node.id}) found in a tree that has not been rewritten"
        )


def eliminate_common_subexpressions(tree: Expr) -> Expr:
    """Return a new tree with repeated subtrees replaced by Substitutions."""
    return CommonSubexpressionEliminator().run(tree)
