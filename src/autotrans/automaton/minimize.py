"""DFA minimization by partition refinement.

This follows Moore's algorithm: start from the accepting / non-accepting
split and keep splitting classes whose members disagree on the class reached
by some symbol, until a full pass splits nothing. The result is numbered in
breadth-first order from the initial class so equal languages always produce
identical automata.
"""

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from autotrans.automaton.determinize import complete
from autotrans.automaton.model import Automaton, Transition
from autotrans.automaton.trim import reachable_states, restrict
from autotrans.config import Config
from autotrans.exceptions import InternalConsistencyError, MalformedAutomatonError

logger = logging.getLogger(__name__)


def initial_partition(dfa: Automaton) -> List[int]:
    """Assign each state its class in the accepting / non-accepting split.

    Class numbers are given in order of first appearance, so an empty class
    never gets a number.
    """
    numbering: Dict[bool, int] = {}
    classes = []
    for state in dfa.states():
        key = dfa.is_accepting(state)
        if key not in numbering:
            numbering[key] = len(numbering)
        classes.append(numbering[key])
    return classes


def refine(dfa: Automaton, classes: List[int]) -> List[int]:
    """Split classes until every member of a class agrees on every symbol.

    Args:
        dfa: A complete DFA.
        classes: Starting class number of each state.

    Returns:
        The class number of each state at the fixed point.
    """
    count = len(set(classes))
    rounds = 0
    while True:
        rounds += 1
        signatures: Dict[Tuple[int, ...], int] = {}
        refined = []
        for state in dfa.states():
            signature = (classes[state],) + tuple(
                classes[dfa.step(state, symbol)] for symbol in dfa.alphabet
            )
            if signature not in signatures:
                signatures[signature] = len(signatures)
            refined.append(signatures[signature])

        classes = refined
        if len(signatures) == count:
            break
        count = len(signatures)

    logger.debug("minimize: partition stable after %d rounds", rounds)
    return classes


def minimize(dfa: Automaton, config: Optional[Config] = None) -> Automaton:
    """Reduce a DFA to the minimal complete DFA for its language.

    Unreachable states are dropped and partial DFAs are completed with a sink
    before refinement, so a missing transition and a transition to a dead
    state mean the same thing.

    Args:
        dfa: A deterministic automaton.
        config: Optional configuration (accepted for a uniform call signature).

    Returns:
        The minimal complete DFA, states numbered in breadth-first order.

    Raises:
        MalformedAutomatonError: If the input is not deterministic.
    """
    if not dfa.is_deterministic:
        raise MalformedAutomatonError("minimization requires a deterministic automaton")

    work = restrict(dfa, reachable_states(dfa))
    work = complete(work)
    classes = refine(work, initial_partition(work))
    result = _quotient(work, classes)

    logger.debug("minimize: %d -> %d states", dfa.size, result.size)
    return result


def _quotient(dfa: Automaton, classes: List[int]) -> Automaton:
    """Build the automaton of classes, numbered by discovery from the initial class."""
    representative: Dict[int, int] = {}
    for state in dfa.states():
        representative.setdefault(classes[state], state)

    for state in dfa.states():
        rep = representative[classes[state]]
        if dfa.is_accepting(state) != dfa.is_accepting(rep):
            raise InternalConsistencyError(
                f"class {classes[state]} mixes accepting and rejecting states"
            )
        for symbol in dfa.alphabet:
            if classes[dfa.step(state, symbol)] != classes[dfa.step(rep, symbol)]:
                raise InternalConsistencyError(
                    f"class {classes[state]} disagrees on symbol {symbol!r}"
                )

    start = classes[dfa.initial]
    number: Dict[int, int] = {start: 0}
    order = [start]
    transitions: List[Transition] = []
    queue: Deque[int] = deque([start])
    while queue:
        cls = queue.popleft()
        rep = representative[cls]
        for symbol in dfa.alphabet:
            target_cls = classes[dfa.step(rep, symbol)]
            if target_cls not in number:
                number[target_cls] = len(order)
                order.append(target_cls)
                queue.append(target_cls)
            transitions.append(Transition(number[cls], symbol, number[target_cls]))

    accepting = frozenset(
        number[cls] for cls in order if dfa.is_accepting(representative[cls])
    )
    return Automaton(
        size=len(order),
        alphabet=dfa.alphabet,
        initial=0,
        accepting=accepting,
        transitions=tuple(transitions),
        deterministic=True,
    )
