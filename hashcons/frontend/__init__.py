"""Text front end: name classification and parsing."""

from hashcons.frontend.names import is_letter
from hashcons.frontend.parser import Parser, ParseError, parse

__all__ = [
    'is_letter',
    'Parser',
    'ParseError',
    'parse',
]
