"""
Tests for the front end: name classification and the parser.

Validates:
  - The 'A'..'z' letter range, punctuation between 'Z' and 'a' included
  - Greedy names and one-character lookahead
  - Unchecked separators, end-of-input failures, empty names
"""

import pytest
from hashcons.frontend.names import is_letter
from hashcons.frontend.parser import Parser, ParseError, parse
from hashcons.ir.expr import Application, Variable


def app(name, left, right):
    return Application(name, left, right)


def var(name):
    return Variable(name)


# ---------- Name Classifier ----------

class TestIsLetter:
    @pytest.mark.parametrize("ch", list("AZazmQ"))
    def test_ascii_letters(self, ch):
        assert is_letter(ch)

    @pytest.mark.parametrize("ch", ["[", "\\", "]", "^", "_", "`"])
    def test_punctuation_between_upper_and_lower(self, ch):
        assert is_letter(ch)

    @pytest.mark.parametrize("ch", ["@", "{", "0", "9", "(", ")", ",", " ", "\n", "é"])
    def test_outside_range(self, ch):
        assert not is_letter(ch)


# ---------- Parser ----------

class TestParser:
    def test_single_letter_variable(self):
        assert parse("a") == var("a")

    def test_multi_letter_variable(self):
        assert parse("alpha") == var("alpha")

    def test_application(self):
        assert parse("f(a,b)") == app("f", var("a"), var("b"))

    def test_nested_application(self):
        expected = app("f", var("a"), app("g", var("b"), var("c")))
        assert parse("f(a,g(b,c))") == expected

    def test_names_are_greedy(self):
        tree = parse("foo(bar,baz)")
        assert tree.name == "foo"
        assert tree.left == var("bar")
        assert tree.right == var("baz")

    def test_wide_letter_range_in_names(self):
        assert parse("_x[(a^,`b)") == app("_x[", var("a^"), var("`b"))

    def test_separators_are_not_checked(self):
        assert parse("f(a;b]") == parse("f(a,b)")

    def test_empty_name_is_accepted(self):
        assert parse("f(,b)") == app("f", var(""), var("b"))

    def test_empty_line(self):
        assert parse("") == var("")

    def test_cursor(self):
        parser = Parser("ab")
        assert parser.peek() == "a"
        assert parser.advance() == "a"
        assert parser.advance() == "b"
        assert parser.peek() is None
        assert parser.advance() is None

    def test_parse_while_stops_at_predicate(self):
        parser = Parser("abc(d")
        assert parser.parse_while(is_letter) == "abc"
        assert parser.peek() == "("


class TestParseErrors:
    @pytest.mark.parametrize("line", ["f(", "f(a", "f(a,", "f(a,b", "f(g(a,b),c"])
    def test_end_of_input(self, line):
        with pytest.raises(ParseError):
            parse(line)

    def test_error_position(self):
        with pytest.raises(ParseError) as info:
            parse("f(a,b")
        assert info.value.position == 5

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse("f(a")

    @pytest.mark.parametrize("line", ["a)", "a b", "a1", "f(a,b)x"])
    def test_trailing_input(self, line):
        with pytest.raises(ParseError):
            parse(line)

    def test_letter_as_separator_runs_out(self):
        # "aXb)" is read as one name, so the right operand meets end of input
        with pytest.raises(ParseError):
            parse("f(aXb)")


class TestDeepNesting:
    DEPTH = 5000

    def test_left_nested(self):
        line = "f(" * self.DEPTH + "a" + ",b)" * self.DEPTH
        tree = parse(line)
        assert tree.size() == 2 * self.DEPTH + 1
        for _ in range(self.DEPTH):
            assert tree.right == var("b")
            tree = tree.left
        assert tree == var("a")

    def test_right_nested(self):
        line = "g(a," * self.DEPTH + "b" + ")" * self.DEPTH
        tree = parse(line)
        for _ in range(self.DEPTH):
            assert tree.name == "g"
            tree = tree.right
        assert tree == var("b")

    def test_unclosed_deep_line(self):
        line = "f(" * self.DEPTH + "a" + ",b)" * (self.DEPTH - 1)
        with pytest.raises(ParseError):
            parse(line)
