"""Subset construction from (epsilon-)NFAs to DFAs."""

import logging
from collections import deque
from typing import Deque, Dict, FrozenSet, List, Optional, Tuple

from autotrans.automaton.model import Automaton, Transition
from autotrans.config import Config
from autotrans.exceptions import EmptyAlphabetError, StateLimitError

logger = logging.getLogger(__name__)

StateSet = FrozenSet[int]

SINK_NAME = "!"


def subset_construction(
    automaton: Automaton, config: Optional[Config] = None
) -> Tuple[Automaton, List[Optional[StateSet]]]:
    """Convert an automaton to a DFA and report which NFA states each DFA state stands for.

    DFA states are numbered in breadth-first discovery order, starting from the
    epsilon-closure of the initial state and following symbols in alphabet
    order. With ``config.complete`` a sink state is allocated the first time a
    set has no successor on some symbol; without it the transition is left out.

    Args:
        automaton: The input automaton, possibly with epsilon transitions.
        config: Optional configuration.

    Returns:
        Tuple of (DFA, subsets) where ``subsets[i]`` is the set of input states
        behind DFA state ``i``, or None for the sink state.

    Raises:
        EmptyAlphabetError: If the alphabet is empty but transitions exist.
        StateLimitError: If the DFA grows past ``config.max_states``.
    """
    config = config or Config.default()
    if not automaton.alphabet and automaton.transitions:
        raise EmptyAlphabetError(
            "cannot determinize an automaton with transitions but no symbols"
        )

    # Closure of each state, and each real transition folded through it
    closures = [automaton.epsilon_closure([s]) for s in automaton.states()]

    def move(states: StateSet, symbol: str) -> StateSet:
        result = set()
        for state in states:
            for target in automaton.successors(state, symbol):
                result |= closures[target]
        return frozenset(result)

    initial = closures[automaton.initial]
    index: Dict[StateSet, int] = {initial: 0}
    subsets: List[Optional[StateSet]] = [initial]
    transitions: List[Transition] = []
    sink: Optional[int] = None

    queue: Deque[StateSet] = deque([initial])
    while queue:
        current = queue.popleft()
        source = index[current]

        for symbol in automaton.alphabet:
            target_set = move(current, symbol)
            if not target_set:
                if not config.complete:
                    continue
                if sink is None:
                    sink = len(subsets)
                    subsets.append(None)
                    _check_limit(len(subsets), config)
                transitions.append(Transition(source, symbol, sink))
                continue

            target = index.get(target_set)
            if target is None:
                target = len(subsets)
                index[target_set] = target
                subsets.append(target_set)
                _check_limit(len(subsets), config)
                queue.append(target_set)
            transitions.append(Transition(source, symbol, target))

    if sink is not None:
        for symbol in automaton.alphabet:
            transitions.append(Transition(sink, symbol, sink))

    accepting = frozenset(
        i
        for i, subset in enumerate(subsets)
        if subset is not None and subset & automaton.accepting
    )
    dfa = Automaton(
        size=len(subsets),
        alphabet=automaton.alphabet,
        initial=0,
        accepting=accepting,
        transitions=tuple(transitions),
        deterministic=True,
        names=subset_names(automaton, subsets),
    )
    logger.debug(
        "determinize: %d NFA states -> %d DFA states%s",
        automaton.size,
        dfa.size,
        " (with sink)" if sink is not None else "",
    )
    return dfa, subsets


def subset_names(
    automaton: Automaton, subsets: List[Optional[StateSet]]
) -> Optional[Tuple[str, ...]]:
    """Label DFA states after the named input states they stand for.

    A set of states ``q0`` and ``q1`` becomes ``{q0,q1}`` and the sink becomes
    ``!``.

    Returns:
        The labels, or None when the input is unnamed or two labels collide.
    """
    if automaton.names is None:
        return None

    names = tuple(
        SINK_NAME
        if subset is None
        else "{" + ",".join(automaton.names[s] for s in sorted(subset)) + "}"
        for subset in subsets
    )
    if len(set(names)) != len(names):
        logger.debug("determinize: subset labels collide, numbering states instead")
        return None
    return names


def determinize(automaton: Automaton, config: Optional[Config] = None) -> Automaton:
    """Convert an automaton to an equivalent DFA by subset construction.

    Args:
        automaton: The input automaton.
        config: Optional configuration; ``complete`` selects a totally defined
            result.

    Returns:
        A deterministic automaton accepting the same language.
    """
    dfa, _ = subset_construction(automaton, config)
    return dfa


def complete(automaton: Automaton) -> Automaton:
    """Add a sink state so a DFA has a transition on every symbol everywhere.

    Complete automata are returned unchanged. A named automaton keeps its
    names and the sink is called ``!`` unless that name is taken.
    """
    if automaton.is_complete():
        return automaton

    sink = automaton.size
    transitions = list(automaton.transitions)
    for state in automaton.states():
        for symbol in automaton.alphabet:
            if not automaton.successors(state, symbol):
                transitions.append(Transition(state, symbol, sink))
    for symbol in automaton.alphabet:
        transitions.append(Transition(sink, symbol, sink))

    names = None
    if automaton.names is not None and SINK_NAME not in automaton.names:
        names = automaton.names + (SINK_NAME,)

    return Automaton(
        size=automaton.size + 1,
        alphabet=automaton.alphabet,
        initial=automaton.initial,
        accepting=automaton.accepting,
        transitions=tuple(transitions),
        deterministic=True,
        names=names,
    )


def _check_limit(size: int, config: Config) -> None:
    if size > config.max_states:
        raise StateLimitError(config.max_states)
