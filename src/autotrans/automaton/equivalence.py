"""Acceptance and language equivalence queries."""

import logging
from collections import deque
from typing import Deque, Dict, FrozenSet, Iterable, List, Optional, Tuple

from autotrans.automaton.determinize import determinize
from autotrans.automaton.minimize import minimize
from autotrans.automaton.model import Automaton
from autotrans.automaton.boolean import check_alphabets, product
from autotrans.automaton.trim import live_states, reachable_states, trim
from autotrans.config import Config
from autotrans.exceptions import MalformedAutomatonError, SymbolNotInAlphabetError

logger = logging.getLogger(__name__)


def accepts(automaton: Automaton, word: Iterable[str]) -> bool:
    """Check whether an automaton accepts a word.

    Non-deterministic automata are simulated by tracking the epsilon-closed
    set of current states.

    Args:
        automaton: Any automaton.
        word: Sequence of symbols; a plain string is read one character at a time.

    Raises:
        SymbolNotInAlphabetError: If the word uses an undeclared symbol.
    """
    symbols = list(word)
    alphabet = set(automaton.alphabet)
    for symbol in symbols:
        if symbol not in alphabet:
            raise SymbolNotInAlphabetError(symbol)

    current: FrozenSet[int] = automaton.epsilon_closure([automaton.initial])
    for symbol in symbols:
        targets = set()
        for state in current:
            targets.update(automaton.successors(state, symbol))
        if not targets:
            return False
        current = automaton.epsilon_closure(targets)
    return bool(current & automaton.accepting)


def canonical(automaton: Automaton, config: Optional[Config] = None) -> Automaton:
    """Compute the trimmed minimal DFA of an automaton's language."""
    config = config or Config.default()
    return trim(minimize(determinize(automaton, config), config))


def is_empty(automaton: Automaton) -> bool:
    """Check whether an automaton accepts no word at all."""
    return automaton.initial not in (reachable_states(automaton) & live_states(automaton))


def is_isomorphic(left: Automaton, right: Automaton) -> bool:
    """Check whether two DFAs are equal up to renaming their states.

    Both automata are walked in lockstep from their initial states; the
    walk must build a consistent bijection that agrees on acceptance and on
    which transitions are defined. States unreachable from the initial state
    must match in number only.

    Raises:
        MalformedAutomatonError: If either automaton is not deterministic.
    """
    if not (left.is_deterministic and right.is_deterministic):
        raise MalformedAutomatonError("isomorphism is only decided for deterministic automata")
    if left.size != right.size or set(left.alphabet) != set(right.alphabet):
        return False

    forward: Dict[int, int] = {left.initial: right.initial}
    backward: Dict[int, int] = {right.initial: left.initial}
    queue: Deque[Tuple[int, int]] = deque([(left.initial, right.initial)])
    while queue:
        p, q = queue.popleft()
        if left.is_accepting(p) != right.is_accepting(q):
            return False
        for symbol in left.alphabet:
            p2 = left.step(p, symbol)
            q2 = right.step(q, symbol)
            if p2 is None or q2 is None:
                if p2 is not q2:
                    return False
                continue
            if p2 in forward or q2 in backward:
                if forward.get(p2) != q2 or backward.get(q2) != p2:
                    return False
                continue
            forward[p2] = q2
            backward[q2] = p2
            queue.append((p2, q2))
    return True


def language_equals(
    left: Automaton, right: Automaton, config: Optional[Config] = None
) -> bool:
    """Check whether two automata accept the same language.

    The trimmed minimal DFA of a language is unique up to renaming, so the
    languages are equal iff the canonical forms are isomorphic.

    Raises:
        AlphabetMismatchError: If the alphabets differ.
    """
    check_alphabets(left, right)
    return is_isomorphic(canonical(left, config), canonical(right, config))


def counterexample(
    left: Automaton, right: Automaton, config: Optional[Config] = None
) -> Optional[List[str]]:
    """Find a shortest word accepted by exactly one of two automata.

    Among the shortest such words, the first in alphabet order is returned.

    Returns:
        The word as a list of symbols, or None if the languages are equal.

    Raises:
        AlphabetMismatchError: If the alphabets differ.
    """
    config = config or Config.default()
    check_alphabets(left, right)
    complete_config = Config(complete=True, max_states=config.max_states)
    diff = product(
        determinize(left, complete_config),
        determinize(right, complete_config),
        lambda a, b: a != b,
        config,
    )

    parent: Dict[int, Tuple[int, str]] = {}
    seen = {diff.initial}
    queue: Deque[int] = deque([diff.initial])
    while queue:
        state = queue.popleft()
        if diff.is_accepting(state):
            word: List[str] = []
            while state != diff.initial:
                state, symbol = parent[state]
                word.append(symbol)
            word.reverse()
            logger.debug("counterexample of length %d found", len(word))
            return word
        for symbol in diff.alphabet:
            target = diff.step(state, symbol)
            if target is not None and target not in seen:
                seen.add(target)
                parent[target] = (state, symbol)
                queue.append(target)
    return None
