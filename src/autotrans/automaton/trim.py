"""Reachability analysis and trimming of automata."""

import logging
from collections import deque
from typing import Dict, FrozenSet, Iterable, List, Set

from autotrans.automaton.model import Automaton, Transition, validate_structure
from autotrans.exceptions import MalformedAutomatonError

logger = logging.getLogger(__name__)


def validate(automaton: Automaton) -> Automaton:
    """Re-check the structural invariants of an automaton.

    Returns:
        The same automaton, so the call can be chained.

    Raises:
        MalformedAutomatonError: If an invariant does not hold.
    """
    validate_structure(automaton)
    return automaton


def reachable_states(automaton: Automaton) -> FrozenSet[int]:
    """Find every state reachable from the initial state.

    Epsilon transitions count as ordinary edges.
    """
    seen: Set[int] = {automaton.initial}
    queue = deque([automaton.initial])
    while queue:
        state = queue.popleft()
        for trans in automaton.transitions_from(state):
            if trans.target not in seen:
                seen.add(trans.target)
                queue.append(trans.target)
    return frozenset(seen)


def live_states(automaton: Automaton) -> FrozenSet[int]:
    """Find every state from which an accepting state can be reached."""
    predecessors: Dict[int, List[int]] = {}
    for trans in automaton.transitions:
        predecessors.setdefault(trans.target, []).append(trans.source)

    seen: Set[int] = set(automaton.accepting)
    queue = deque(sorted(automaton.accepting))
    while queue:
        state = queue.popleft()
        for source in predecessors.get(state, ()):
            if source not in seen:
                seen.add(source)
                queue.append(source)
    return frozenset(seen)


def restrict(automaton: Automaton, keep: Iterable[int]) -> Automaton:
    """Keep only the given states and the transitions between them.

    Kept states are renumbered densely in their original order, and keep
    their names.

    Raises:
        MalformedAutomatonError: If the initial state is not kept.
    """
    kept = sorted(set(keep))
    if automaton.initial not in kept:
        raise MalformedAutomatonError("cannot drop the initial state")

    renumber = {old: new for new, old in enumerate(kept)}
    transitions = [
        Transition(renumber[t.source], t.symbol, renumber[t.target])
        for t in automaton.transitions
        if t.source in renumber and t.target in renumber
    ]
    names = None
    if automaton.names is not None:
        names = tuple(automaton.names[old] for old in kept)

    return Automaton(
        size=len(kept),
        alphabet=automaton.alphabet,
        initial=renumber[automaton.initial],
        accepting=frozenset(renumber[s] for s in automaton.accepting if s in renumber),
        transitions=tuple(transitions),
        deterministic=automaton.deterministic,
        names=names,
    )


def empty_automaton(alphabet: Iterable[str]) -> Automaton:
    """Build the canonical automaton of the empty language.

    It has a single non-accepting state and no transitions.
    """
    return Automaton(size=1, alphabet=tuple(alphabet), deterministic=True)


def trim(automaton: Automaton) -> Automaton:
    """Remove unreachable states and states that can never lead to acceptance.

    If no accepting state is reachable, the result is empty_automaton().
    """
    keep = reachable_states(automaton) & live_states(automaton)
    if automaton.initial not in keep:
        logger.debug("trim: no accepting state reachable, language is empty")
        return empty_automaton(automaton.alphabet)

    if len(keep) == automaton.size:
        return automaton

    result = restrict(automaton, keep)
    logger.debug("trim: %d -> %d states", automaton.size, result.size)
    return result
