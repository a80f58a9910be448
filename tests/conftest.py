"""Shared automata for the test suite.

Every fixture builds a fresh automaton, so tests may freely transform them.
"""

import pytest

from autotrans.automaton.model import EPSILON, Automaton


def make(size, alphabet, transitions, accepting, initial=0, deterministic=False):
    """Build an automaton from (source, symbol, target) triples."""
    return Automaton(
        size=size,
        alphabet=tuple(alphabet),
        initial=initial,
        accepting=frozenset(accepting),
        transitions=tuple(transitions),
        deterministic=deterministic,
    )


@pytest.fixture
def ends_with_b():
    """NFA over {a, b} for words ending in b; non-deterministic on b."""
    return make(2, "ab", [(0, "a", 0), (0, "b", 1), (0, "b", 0)], {1})


@pytest.fixture
def even_ones():
    """Minimal DFA over {0, 1} for words with an even number of 1s."""
    return make(
        2,
        "01",
        [(0, "0", 0), (0, "1", 1), (1, "0", 1), (1, "1", 0)],
        {0},
        deterministic=True,
    )


@pytest.fixture
def even_ones_redundant():
    """Five-state DFA for the even-ones language.

    States 0 and 2 are both "even", 1 and 3 both "odd", and 4 is unreachable.
    """
    return make(
        5,
        "01",
        [
            (0, "0", 2), (0, "1", 1),
            (1, "0", 3), (1, "1", 0),
            (2, "0", 0), (2, "1", 3),
            (3, "0", 1), (3, "1", 2),
            (4, "0", 4), (4, "1", 1),
        ],
        {0, 2, 4},
        deterministic=True,
    )


@pytest.fixture
def epsilon_nfa():
    """Epsilon-NFA over {a, b} accepting exactly a, aa and ba."""
    return make(
        6,
        "ab",
        [
            (0, "a", 1),
            (0, EPSILON, 2),
            (0, EPSILON, 3),
            (1, EPSILON, 3),
            (2, "b", 3),
            (3, EPSILON, 4),
            (4, "a", 5),
        ],
        {5},
    )


@pytest.fixture
def empty_language():
    """Automaton whose only accepting state is unreachable."""
    return make(3, "a", [(0, "a", 1), (1, "a", 0), (2, "a", 2)], {2})


@pytest.fixture
def contains_aa():
    """NFA over {a, b} for words containing aa."""
    return make(
        3,
        "ab",
        [
            (0, "a", 0), (0, "b", 0), (0, "a", 1),
            (1, "a", 2),
            (2, "a", 2), (2, "b", 2),
        ],
        {2},
    )


@pytest.fixture
def a_star_b():
    """Partial DFA over {a, b} for a*b."""
    return make(2, "ab", [(0, "a", 0), (0, "b", 1)], {1}, deterministic=True)


@pytest.fixture
def fourth_from_last():
    """NFA over {a, b} for words whose fourth-to-last symbol is a.

    Its DFA needs 16 states.
    """
    transitions = [(0, "a", 0), (0, "b", 0), (0, "a", 1)]
    for state in range(1, 4):
        transitions += [(state, "a", state + 1), (state, "b", state + 1)]
    return make(5, "ab", transitions, {4})
