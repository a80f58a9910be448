"""Tests for union, intersection, difference and complement."""

from itertools import product as cartesian

import pytest

from autotrans.automaton.boolean import (
    check_alphabets,
    complement,
    difference,
    intersection,
    product,
    union,
)
from autotrans.automaton.determinize import determinize
from autotrans.automaton.equivalence import accepts, is_empty, language_equals
from autotrans.automaton.model import Automaton
from autotrans.automaton.trim import trim
from autotrans.config import Config
from autotrans.exceptions import AlphabetMismatchError, StateLimitError


def words(alphabet, max_length):
    """Yield every word over the alphabet up to the given length."""
    for length in range(max_length + 1):
        for word in cartesian(alphabet, repeat=length):
            yield list(word)


OPERATIONS = [
    (union, lambda a, b: a or b, "union"),
    (intersection, lambda a, b: a and b, "intersection"),
    (difference, lambda a, b: a and not b, "difference"),
]


class TestPointwise:
    """Each operation agrees with the boolean rule on every short word."""

    @pytest.mark.parametrize("operation,rule,name", OPERATIONS)
    def test_ends_with_b_and_contains_aa(self, ends_with_b, contains_aa, operation, rule, name):
        result = operation(ends_with_b, contains_aa)
        for word in words("ab", 5):
            expected = rule(accepts(ends_with_b, word), accepts(contains_aa, word))
            assert accepts(result, word) == expected, (name, word)

    @pytest.mark.parametrize("operation,rule,name", OPERATIONS)
    def test_with_epsilon_operand(self, epsilon_nfa, contains_aa, operation, rule, name):
        result = operation(epsilon_nfa, contains_aa)
        for word in words("ab", 4):
            expected = rule(accepts(epsilon_nfa, word), accepts(contains_aa, word))
            assert accepts(result, word) == expected, (name, word)

    def test_complement(self, ends_with_b):
        result = complement(ends_with_b)
        for word in words("ab", 5):
            assert accepts(result, word) != accepts(ends_with_b, word), word


class TestResultShape:
    @pytest.mark.parametrize("operation,rule,name", OPERATIONS)
    def test_results_are_trimmed_dfas(self, ends_with_b, contains_aa, operation, rule, name):
        result = operation(ends_with_b, contains_aa)
        assert result.deterministic
        assert trim(result) == result, name

    def test_complement_of_even_ones(self, even_ones):
        odd = complement(even_ones)
        assert odd.size == 2
        assert odd.accepting == frozenset({1})

    def test_complement_of_everything_is_empty(self):
        everything = Automaton(size=1, alphabet=("a",), accepting={0}, transitions=[(0, "a", 0)])
        assert is_empty(complement(everything))

    def test_complement_of_empty_is_everything(self, empty_language):
        everything = complement(empty_language)
        assert everything.size == 1
        assert everything.accepting == frozenset({0})
        assert accepts(everything, "aaaa")

    def test_difference_with_itself_is_empty(self, contains_aa):
        assert is_empty(difference(contains_aa, contains_aa))

    def test_intersection_with_disjoint_language_is_empty(self, ends_with_b):
        ends_with_a = Automaton(
            size=2,
            alphabet=("a", "b"),
            transitions=[(0, "a", 0), (0, "b", 0), (0, "a", 1)],
            accepting={1},
        )
        assert is_empty(intersection(ends_with_b, ends_with_a))


class TestLaws:
    def test_de_morgan(self, ends_with_b, contains_aa):
        left = complement(union(ends_with_b, contains_aa))
        right = intersection(complement(ends_with_b), complement(contains_aa))
        assert language_equals(left, right)

    def test_de_morgan_dual(self, epsilon_nfa, contains_aa):
        left = complement(intersection(epsilon_nfa, contains_aa))
        right = union(complement(epsilon_nfa), complement(contains_aa))
        assert language_equals(left, right)

    def test_double_complement(self, epsilon_nfa):
        assert language_equals(complement(complement(epsilon_nfa)), epsilon_nfa)

    def test_union_commutes(self, ends_with_b, contains_aa):
        assert union(ends_with_b, contains_aa) == union(contains_aa, ends_with_b)


class TestAlphabets:
    @pytest.mark.parametrize("operation,rule,name", OPERATIONS)
    def test_mismatch(self, ends_with_b, even_ones, operation, rule, name):
        with pytest.raises(AlphabetMismatchError):
            operation(ends_with_b, even_ones)

    def test_order_does_not_matter(self, ends_with_b):
        reordered = Automaton(
            size=2,
            alphabet=("b", "a"),
            transitions=[(0, "a", 0), (0, "b", 0), (0, "b", 1)],
            accepting={1},
        )
        check_alphabets(ends_with_b, reordered)
        assert language_equals(union(ends_with_b, reordered), ends_with_b)


class TestProduct:
    def test_only_reachable_pairs(self, even_ones):
        result = product(even_ones, even_ones, lambda a, b: a and b)
        assert result.size == 2

    def test_state_limit(self, fourth_from_last):
        left = determinize(fourth_from_last)
        with pytest.raises(StateLimitError):
            product(left, left, lambda a, b: a or b, Config(max_states=4))
