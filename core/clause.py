# core/clause.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Literal and conjunction algebra over one boolean variable per message bit

"""Literals (terms) and conjunctions of literals.

A `Term` asserts the value of one message position: `x3` means bit 3 is 1,
`¬x3` means bit 3 is 0. A `Conjunction` is a consistent set of terms kept in
strictly increasing id order. That order is the representation invariant
behind two properties the engines rely on:

- structurally equal conjunctions hash and compare equal, so a clause set
  deduplicates candidates reached through different embeddings;
- `merge` is a single linear pass over both sorted term lists.

A conjunction fixing every position 0..n-1 describes exactly one message;
fewer terms describe the family of messages agreeing on the fixed bits.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from model.bits import Bits


@dataclass(frozen=True, slots=True, order=True)
class Term:
    """Assertion on a single message position.

    Attributes:
        id: Message position in [0, n)
        negated: True for "bit equals 0", False for "bit equals 1"
    """

    id: int
    negated: bool = False

    @property
    def value(self) -> bool:
        """Bit value this term requires."""
        return not self.negated

    def contradicts(self, other: Term) -> bool:
        """True if both terms constrain the same position to different values."""
        return self.id == other.id and self.negated != other.negated

    def satisfied_by(self, message: Bits) -> bool:
        return self.id < len(message) and message[self.id] == self.value

    def __invert__(self) -> Term:
        return Term(self.id, not self.negated)

    def __str__(self) -> str:
        return f"{'¬' if self.negated else ''}x{self.id}"


@dataclass(frozen=True, slots=True, order=True)
class Conjunction:
    """Sorted, contradiction-free conjunction of terms.

    Attributes:
        terms: Terms in strictly increasing id order
    """

    terms: Tuple[Term, ...] = ()

    def __post_init__(self):
        terms = tuple(self.terms)
        for previous, current in zip(terms, terms[1:]):
            if current.id <= previous.id:
                raise ValueError(
                    f"Conjunction terms must have strictly increasing ids: {previous}, {current}"
                )
        object.__setattr__(self, "terms", terms)

    @classmethod
    def from_terms(cls, terms: Iterable[Term]) -> Optional[Conjunction]:
        """Build a conjunction from terms in any order.

        Duplicate terms collapse; contradictory terms yield None.
        """
        by_id = {}
        for term in terms:
            existing = by_id.get(term.id)
            if existing is not None and existing.contradicts(term):
                return None
            by_id[term.id] = term
        return cls(tuple(by_id[i] for i in sorted(by_id)))

    @classmethod
    def _from_sorted(cls, terms: Tuple[Term, ...]) -> Conjunction:
        # Caller guarantees strictly increasing ids; skips __post_init__ validation
        conjunction = object.__new__(cls)
        object.__setattr__(conjunction, "terms", terms)
        return conjunction

    @property
    def ids(self) -> Tuple[int, ...]:
        return tuple(term.id for term in self.terms)

    def merge(self, other: Conjunction) -> Optional[Conjunction]:
        """Conjunction implied by asserting both `self` and `other`.

        Walks both sorted term lists in lockstep. Terms present on one side
        only are copied through; shared ids must agree on polarity.

        Args:
            other: Conjunction to merge with

        Returns:
            The merged conjunction, or None if the two contradict each other
        """
        lhs, rhs = self.terms, other.terms
        merged = []
        i = j = 0

        while i < len(lhs) and j < len(rhs):
            left, right = lhs[i], rhs[j]
            if right.id < left.id:
                merged.append(right)
                j += 1
            elif left.id < right.id:
                merged.append(left)
                i += 1
            else:
                if left.contradicts(right):
                    return None
                merged.append(left)
                i += 1
                j += 1

        merged.extend(lhs[i:])
        merged.extend(rhs[j:])
        return Conjunction._from_sorted(tuple(merged))

    def is_complete(self, message_len: int) -> bool:
        """True if every position 0..message_len-1 is fixed exactly once."""
        return self.ids == tuple(range(message_len))

    def to_bits(self) -> Bits:
        """Read off the bit values of a complete conjunction."""
        for expected, term in enumerate(self.terms):
            if term.id != expected:
                raise ValueError(f"Conjunction {self} does not fix position {expected}")
        return tuple(term.value for term in self.terms)

    def satisfied_by(self, message: Bits) -> bool:
        return all(term.satisfied_by(message) for term in self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self) -> Iterator[Term]:
        return iter(self.terms)

    def __str__(self) -> str:
        if not self.terms:
            return "()"
        return "(" + " ∧ ".join(str(term) for term in self.terms) + ")"
