"""
Expression Parser
=================

Predictive parser for one line of input, with a single character of
lookahead. Open applications are kept on an explicit stack, so any
nesting depth the grammar allows can be parsed:

    Expr  ::= Name [ '(' Expr ',' Expr ')' ]
    Name  ::= Letter+

The separator and the closing parenthesis are consumed without being
checked, so ``f(a;b]`` parses like ``f(a,b)``. Running out of input
where one of them is due raises ParseError. A missing name yields an
empty name instead of an error.
"""

import logging
from typing import Callable, List, Optional

from hashcons.frontend.names import is_letter
from hashcons.ir.expr import Application, Expr, Variable

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when a line cannot be parsed into a complete expression."""

    def __init__(self, message: str, position: int = -1):
        super().__init__(message)
        self.position = position


class Parser:
    """
    Parser over a single line of text.

    Usage:
        >>> Parser("f(a,b)").parse()
        Application(name='f', left=Variable(name='a'), right=Variable(name='b'))
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    # ---- Cursor ----

    def peek(self) -> Optional[str]:
        """Return the next character without consuming it."""
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return the next character, or None at end of input."""
        ch = self.peek()
        if ch is not None:
            self.pos += 1
        return ch

    def parse_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.pos
        while self.pos < len(self.text) and predicate(self.text[self.pos]):
            self.pos += 1
        return self.text[start:self.pos]

    def expect_any(self, expected: str) -> str:
        """Consume one character, which should be ``expected``."""
        position = self.pos
        ch = self.advance()
        if ch is None:
            raise ParseError(
                f"unexpected end of input at column {position + 1}, "
                f"expected {expected!r}",
                position,
            )
        if ch != expected:
            logger.debug(
                f"Accepted {ch!r} in place of {expected!r} at column {position + 1}"
            )
        return ch

    # ---- Grammar ----

    def parse_name(self) -> str:
        name = self.parse_while(is_letter)
        if not name:
            logger.debug(f"Empty name at column {self.pos + 1}")
        return name

    def parse_expr(self) -> Expr:
        """
        Parse one expression starting at the cursor.

        Open applications wait on ``pending`` as ``[name, left]`` frames;
        ``left`` is None until the operand before the separator is done.
        """
        pending: List[list] = []
        while True:
            name = self.parse_name()
            if self.peek() == '(':
                self.expect_any('(')
                pending.append([name, None])
                continue

            expr: Expr = Variable(name)
            while pending:
                frame = pending[-1]
                if frame[1] is None:
                    frame[1] = expr
                    self.expect_any(',')
                    break
                self.expect_any(')')
                pending.pop()
                expr = Application(frame[0], frame[1], expr)
            else:
                return expr

    def parse(self) -> Expr:
        """Parse the whole line as one expression."""
        expr = self.parse_expr()
        if self.pos != len(self.text):
            raise ParseError(
                f"unexpected {self.text[self.pos]!r} at column {self.pos + 1} "
                f"after a complete expression",
                self.pos,
            )
        return expr


def parse(line: str) -> Expr:
    """Parse one line into an expression tree."""
    return Parser(line).parse()
