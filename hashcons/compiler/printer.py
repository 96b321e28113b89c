"""Render expression trees back to the input notation."""

from typing import List, Union

from hashcons.ir.expr import Application, Expr, Substitution, Variable


def render(tree: Expr) -> str:
    """
    Render ``tree`` as text.

    Variable -> ``name``, Application -> ``name(left,right)`` with no
    spaces, Substitution -> its id in decimal.
    """
    parts: List[str] = []
    # Pending nodes and literal punctuation, popped left to right
    stack: List[Union[Expr, str]] = [tree]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Application):
            parts.append(f"{item.name}(")
            stack.extend((")", item.right, ",", item.left))
        elif isinstance(item, Variable):
            parts.append(item.name)
        elif isinstance(item, Substitution):
            parts.append(str(item.id))
        else:
            raise TypeError(f"not an expression node: {item!r}")
    return "".join(parts)
