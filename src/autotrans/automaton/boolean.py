"""Boolean operations on regular languages via product automata."""

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple

from autotrans.automaton.determinize import determinize
from autotrans.automaton.minimize import minimize
from autotrans.automaton.model import Automaton, Transition
from autotrans.automaton.trim import trim
from autotrans.config import Config
from autotrans.exceptions import AlphabetMismatchError, StateLimitError

logger = logging.getLogger(__name__)

StatePair = Tuple[int, int]
AcceptRule = Callable[[bool, bool], bool]


def _complete_minimal(automaton: Automaton, config: Config) -> Automaton:
    """Determinize into a complete DFA and minimize it."""
    complete_config = Config(complete=True, max_states=config.max_states)
    return minimize(determinize(automaton, complete_config), complete_config)


def check_alphabets(left: Automaton, right: Automaton) -> None:
    """Ensure two automata are over the same set of symbols.

    Raises:
        AlphabetMismatchError: If the alphabets differ.
    """
    if set(left.alphabet) != set(right.alphabet):
        only_left = sorted(set(left.alphabet) - set(right.alphabet))
        only_right = sorted(set(right.alphabet) - set(left.alphabet))
        raise AlphabetMismatchError(
            f"alphabets differ: only left {only_left}, only right {only_right}"
        )


def product(
    left: Automaton,
    right: Automaton,
    accept: AcceptRule,
    config: Optional[Config] = None,
) -> Automaton:
    """Build the reachable part of the product of two complete DFAs.

    States are pairs of component states, discovered breadth-first from the
    pair of initial states and following the left alphabet's order. A pair
    accepts when ``accept(left_accepts, right_accepts)`` holds.

    Args:
        left: A complete DFA.
        right: A complete DFA over the same alphabet.
        accept: Acceptance rule for pairs.
        config: Optional configuration; ``max_states`` bounds the product.

    Returns:
        The product DFA.
    """
    config = config or Config.default()
    check_alphabets(left, right)

    start = (left.initial, right.initial)
    index: Dict[StatePair, int] = {start: 0}
    pairs: List[StatePair] = [start]
    transitions: List[Transition] = []
    queue: Deque[StatePair] = deque([start])

    while queue:
        pair = queue.popleft()
        source = index[pair]
        for symbol in left.alphabet:
            target = (left.step(pair[0], symbol), right.step(pair[1], symbol))
            if target not in index:
                if len(pairs) >= config.max_states:
                    raise StateLimitError(config.max_states)
                index[target] = len(pairs)
                pairs.append(target)
                queue.append(target)
            transitions.append(Transition(source, symbol, index[target]))

    accepting = frozenset(
        i
        for i, (p, q) in enumerate(pairs)
        if accept(left.is_accepting(p), right.is_accepting(q))
    )
    logger.debug(
        "product: %d x %d -> %d reachable pairs", left.size, right.size, len(pairs)
    )
    return Automaton(
        size=len(pairs),
        alphabet=left.alphabet,
        initial=0,
        accepting=accepting,
        transitions=tuple(transitions),
        deterministic=True,
    )


def combine(
    left: Automaton,
    right: Automaton,
    accept: AcceptRule,
    config: Optional[Config] = None,
) -> Automaton:
    """Apply a boolean operation to the languages of two automata.

    Both operands are determinized and minimized, their product is built,
    and the product is minimized and trimmed.
    """
    config = config or Config.default()
    check_alphabets(left, right)
    result = product(
        _complete_minimal(left, config),
        _complete_minimal(right, config),
        accept,
        config,
    )
    return trim(minimize(result, config))


def union(left: Automaton, right: Automaton, config: Optional[Config] = None) -> Automaton:
    """Build an automaton accepting words accepted by either operand.

    Raises:
        AlphabetMismatchError: If the alphabets differ.
    """
    return combine(left, right, lambda a, b: a or b, config)


def intersection(
    left: Automaton, right: Automaton, config: Optional[Config] = None
) -> Automaton:
    """Build an automaton accepting words accepted by both operands.

    Raises:
        AlphabetMismatchError: If the alphabets differ.
    """
    return combine(left, right, lambda a, b: a and b, config)


def complement(automaton: Automaton, config: Optional[Config] = None) -> Automaton:
    """Build an automaton accepting exactly the words the input rejects.

    The input is turned into a complete minimal DFA first, so every word
    ends in some state and flipping acceptance is sound.
    """
    config = config or Config.default()
    dfa = _complete_minimal(automaton, config)
    flipped = dfa.with_accepting(s for s in dfa.states() if not dfa.is_accepting(s))
    return trim(flipped)


def difference(
    left: Automaton, right: Automaton, config: Optional[Config] = None
) -> Automaton:
    """Build an automaton accepting words of the left operand not in the right.

    Raises:
        AlphabetMismatchError: If the alphabets differ.
    """
    check_alphabets(left, right)
    return intersection(left, complement(right, config), config)
