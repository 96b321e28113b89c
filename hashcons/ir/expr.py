"""
Expression Model
================

The tree type shared by the parser, the CSE engine and the printer.

An expression is one of three immutable node kinds:

  Application(name, left, right)  -- named binary node
  Variable(name)                  -- leaf
  Substitution(id)                -- reference to an earlier subtree;
                                     only ever built by the CSE engine

Equality is structural and always authoritative. Each node caches a
structural hash at construction time, combined by wrapping 64-bit
addition:

  hash(Variable(n))        = hash(n)
  hash(Application(n,l,r)) = hash(n) + hash(l) + hash(r)   (mod 2**64)
  hash(Substitution(i))    = i

The hash only accelerates dictionary lookup. Unequal trees are allowed
to collide (``f(a,b)`` and ``f(b,a)`` always do) and are told apart by
``__eq__``, which never looks at the cached value.

Equality walks both trees with an explicit stack, as do the parser, the
CSE pass and the printer, so nesting depth is not bounded by the
interpreter recursion limit.
"""

from dataclasses import dataclass, field


HASH_BITS = 64
_HASH_MASK = (1 << HASH_BITS) - 1
_HASH_SIGN = 1 << (HASH_BITS - 1)


def combine_hashes(*values: int) -> int:
    """Add hash values with two's-complement wraparound at HASH_BITS."""
    total = 0
    for value in values:
        total = (total + value) & _HASH_MASK
    # Back to a signed value, like a machine integer
    if total & _HASH_SIGN:
        total -= 1 << HASH_BITS
    return total


class Expr:
    """Base class of all expression nodes."""

    __slots__ = ()

    def size(self) -> int:
        """Number of nodes in this tree."""
        raise NotImplementedError

    def __eq__(self, other):
        if not isinstance(other, Expr):
            return NotImplemented
        pairs = [(self, other)]
        while pairs:
            a, b = pairs.pop()
            if a is b:
                continue
            if type(a) is not type(b):
                return False
            if isinstance(a, Application):
                if a.name != b.name:
                    return False
                pairs.append((a.right, b.right))
                pairs.append((a.left, b.left))
            elif isinstance(a, Variable):
                if a.name != b.name:
                    return False
            elif a.id != b.id:
                return False
        return True


@dataclass(frozen=True, eq=False)
class Application(Expr):
    """A named node with exactly two children."""
    name: str
    left: Expr
    right: Expr
    _hash: int = field(init=False, repr=False, compare=False)
    _size: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, '_hash',
            combine_hashes(hash(self.name), hash(self.left), hash(self.right)),
        )
        object.__setattr__(self, '_size', 1 + self.left.size() + self.right.size())

    def __hash__(self) -> int:
        return self._hash

    def size(self) -> int:
        return self._size


@dataclass(frozen=True, eq=False)
class Variable(Expr):
    """A leaf holding a name."""
    name: str
    _hash: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, '_hash', combine_hashes(hash(self.name)))

    def __hash__(self) -> int:
        return self._hash

    def size(self) -> int:
        return 1


@dataclass(frozen=True, eq=False)
class Substitution(Expr):
    """Reference to the replacement id of an earlier, identical subtree."""
    id: int

    def __hash__(self) -> int:
        return self.id

    def size(self) -> int:
        return 1
