"""
Tests for the expression model: structural equality and the hash contract.
"""

import dataclasses
import pytest
from hashcons.frontend.parser import parse
from hashcons.ir.expr import (
    HASH_BITS,
    Application,
    Substitution,
    Variable,
    combine_hashes,
)


class TestStructuralEquality:
    def test_equal_trees_built_separately(self):
        a = parse("f(g(a,b),c)")
        b = parse("f(g(a,b),c)")
        assert a is not b
        assert a == b

    def test_child_order_matters(self):
        assert parse("f(a,b)") != parse("f(b,a)")

    def test_names_matter(self):
        assert parse("f(a,b)") != parse("g(a,b)")
        assert Variable("a") != Variable("b")

    def test_variants_differ(self):
        assert Variable("a") != Application("a", Variable("a"), Variable("a"))
        assert Variable("1") != Substitution(1)

    def test_substitution_equality(self):
        assert Substitution(3) == Substitution(3)
        assert Substitution(3) != Substitution(4)

    def test_equality_ignores_cached_hash(self):
        a = parse("f(a,b)")
        b = parse("f(a,b)")
        object.__setattr__(b, '_hash', hash(a) + 1)
        assert a == b

    def test_nodes_are_immutable(self):
        node = Variable("a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.name = "b"


class TestStructuralHash:
    def test_equal_trees_hash_equal(self):
        assert hash(parse("f(g(a,b),c)")) == hash(parse("f(g(a,b),c)"))

    def test_application_combines_children(self):
        node = parse("f(a,b)")
        expected = combine_hashes(hash("f"), hash(Variable("a")), hash(Variable("b")))
        assert node._hash == expected

    def test_substitution_hashes_to_id(self):
        assert hash(Substitution(7)) == 7

    def test_collisions_do_not_merge_keys(self):
        fab, fba = parse("f(a,b)"), parse("f(b,a)")
        assert hash(fab) == hash(fba)
        table = {fab: 1, fba: 2}
        assert len(table) == 2
        assert table[parse("f(b,a)")] == 2

    def test_lookup_by_equal_tree(self):
        table = {parse("f(a,g(b,c))"): 1}
        assert parse("f(a,g(b,c))") in table
        assert parse("f(a,g(c,b))") not in table


class TestCombineHashes:
    def test_plain_sum(self):
        assert combine_hashes(1, 2, 3) == 6

    def test_wraps_to_negative(self):
        assert combine_hashes(2 ** (HASH_BITS - 1) - 1, 1) == -(2 ** (HASH_BITS - 1))

    def test_wraps_to_zero(self):
        assert combine_hashes(-1, 1) == 0

    def test_stays_in_range(self):
        big = 2 ** (HASH_BITS - 1) - 1
        value = combine_hashes(big, big, big)
        assert -(2 ** (HASH_BITS - 1)) <= value < 2 ** (HASH_BITS - 1)


class TestSize:
    def test_leaf(self):
        assert Variable("a").size() == 1
        assert Substitution(1).size() == 1

    def test_tree(self):
        assert parse("f(a,f(a,a))").size() == 5


def nested(depth, leaf):
    tree = Variable(leaf)
    for _ in range(depth):
        tree = Application("f", tree, Variable("b"))
    return tree


class TestDeepTrees:
    DEPTH = 5000

    def test_equal_deep_trees(self):
        assert nested(self.DEPTH, "a") == nested(self.DEPTH, "a")

    def test_unequal_at_the_bottom(self):
        assert nested(self.DEPTH, "a") != nested(self.DEPTH, "c")

    def test_dict_lookup(self):
        table = {nested(self.DEPTH, "a"): 1}
        assert table[nested(self.DEPTH, "a")] == 1
        assert nested(self.DEPTH, "c") not in table

    def test_size(self):
        assert nested(self.DEPTH, "a").size() == 2 * self.DEPTH + 1
