"""Immutable finite automaton model shared by every algorithm."""

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from autotrans.exceptions import MalformedAutomatonError

# Distinguished symbol for transitions that consume no input
EPSILON = ""


@dataclass(frozen=True)
class Transition:
    """A labelled edge between two states of an automaton.

    Attributes:
        source: Index of the state the edge leaves.
        symbol: Alphabet symbol read, or EPSILON.
        target: Index of the state the edge enters.
    """

    source: int
    symbol: str
    target: int

    def is_epsilon(self) -> bool:
        """Check if this transition consumes no input."""
        return self.symbol == EPSILON

    def __repr__(self) -> str:
        label = self.symbol if self.symbol != EPSILON else "ε"
        return f"Transition({self.source} --{label}--> {self.target})"


@dataclass(frozen=True)
class Automaton:
    """A possibly non-deterministic finite automaton.

    States are the dense index range ``0 .. size - 1``. Instances are
    immutable: every transformation builds a new automaton. Transitions are
    deduplicated and sorted on construction, so two automata with the same
    structure compare equal.

    Attributes:
        size: Number of states.
        alphabet: Declared symbols, in the order algorithms iterate them.
        initial: Index of the initial state.
        accepting: Indices of the accepting states.
        transitions: All transitions, sorted by source, symbol and target.
        deterministic: Whether the automaton is declared deterministic.
        names: Optional label for each state, kept for display and I/O.
    """

    size: int
    alphabet: Tuple[str, ...]
    initial: int = 0
    accepting: FrozenSet[int] = frozenset()
    transitions: Tuple[Transition, ...] = ()
    deterministic: bool = False
    names: Optional[Tuple[str, ...]] = None
    _outgoing: Tuple[Tuple[Transition, ...], ...] = field(
        default=(), init=False, repr=False, compare=False
    )
    _delta: Dict[Tuple[int, str], Tuple[int, ...]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "alphabet", tuple(self.alphabet))
        object.__setattr__(self, "accepting", frozenset(self.accepting))
        if self.names is not None:
            object.__setattr__(self, "names", tuple(self.names))
        object.__setattr__(
            self, "transitions", tuple(_coerce(t) for t in self.transitions)
        )

        validate_structure(self)

        order = {symbol: i + 1 for i, symbol in enumerate(self.alphabet)}
        order[EPSILON] = 0
        ordered = tuple(
            sorted(
                set(self.transitions),
                key=lambda t: (t.source, order[t.symbol], t.target),
            )
        )
        object.__setattr__(self, "transitions", ordered)

        outgoing: List[List[Transition]] = [[] for _ in range(self.size)]
        delta: Dict[Tuple[int, str], List[int]] = {}
        for trans in ordered:
            outgoing[trans.source].append(trans)
            delta.setdefault((trans.source, trans.symbol), []).append(trans.target)
        object.__setattr__(self, "_outgoing", tuple(tuple(o) for o in outgoing))
        object.__setattr__(
            self, "_delta", {key: tuple(targets) for key, targets in delta.items()}
        )

    def __len__(self) -> int:
        return self.size

    def states(self) -> range:
        """Return the state index range."""
        return range(self.size)

    def transitions_from(self, state: int) -> Tuple[Transition, ...]:
        """Get the outgoing transitions of a state (possibly empty)."""
        return self._outgoing[state]

    def successors(self, state: int, symbol: str) -> Tuple[int, ...]:
        """Get the destinations of a state on a symbol."""
        return self._delta.get((state, symbol), ())

    def step(self, state: int, symbol: str) -> Optional[int]:
        """Follow the single transition of a state on a symbol.

        Returns:
            The destination state, or None when the transition is undefined.

        Raises:
            MalformedAutomatonError: If the state has several destinations.
        """
        targets = self._delta.get((state, symbol), ())
        if not targets:
            return None
        if len(targets) > 1:
            raise MalformedAutomatonError(
                f"state {state} has {len(targets)} transitions on {symbol!r}"
            )
        return targets[0]

    def is_accepting(self, state: int) -> bool:
        return state in self.accepting

    @property
    def is_deterministic(self) -> bool:
        """Whether the automaton is declared or structurally deterministic."""
        if self.deterministic:
            return True
        return all(
            symbol != EPSILON and len(targets) == 1
            for (_, symbol), targets in self._delta.items()
        )

    def has_epsilon(self) -> bool:
        return any(t.is_epsilon() for t in self.transitions)

    def is_complete(self) -> bool:
        """Check if every state has exactly one transition per symbol."""
        if not self.is_deterministic:
            return False
        return all(
            (state, symbol) in self._delta
            for state in self.states()
            for symbol in self.alphabet
        )

    def epsilon_closure(self, states: Iterable[int]) -> FrozenSet[int]:
        """Compute every state reachable through zero or more epsilon moves."""
        closure: Set[int] = set(states)
        stack: List[int] = list(closure)
        while stack:
            state = stack.pop()
            for target in self._delta.get((state, EPSILON), ()):
                if target not in closure:
                    closure.add(target)
                    stack.append(target)
        return frozenset(closure)

    def name_of(self, state: int) -> str:
        """Get the display name of a state."""
        if self.names is not None:
            return self.names[state]
        return str(state)

    def index_of(self, name: str) -> int:
        """Find a state by its display name.

        Raises:
            KeyError: If no state carries that name.
        """
        for state in self.states():
            if self.name_of(state) == name:
                return state
        raise KeyError(name)

    def with_accepting(self, accepting: Iterable[int]) -> "Automaton":
        """Create a copy of this automaton with a different accepting set."""
        return replace(self, accepting=frozenset(accepting))


def _coerce(item) -> Transition:
    if isinstance(item, Transition):
        return item
    try:
        source, symbol, target = item
    except (TypeError, ValueError):
        raise MalformedAutomatonError(f"not a transition: {item!r}") from None
    return Transition(source, symbol, target)


def _is_index(value, size: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < size


def _is_token(value) -> bool:
    # A leading "#" would read back as a comment line
    return (
        isinstance(value, str)
        and value != ""
        and not value.startswith("#")
        and not any(c.isspace() for c in value)
    )


def validate_structure(automaton: Automaton) -> None:
    """Check every structural invariant of an automaton.

    Raises:
        MalformedAutomatonError: On the first violated invariant.
    """
    size = automaton.size
    if not isinstance(size, int) or size < 1:
        raise MalformedAutomatonError("an automaton needs at least one state")

    seen: Set[str] = set()
    for symbol in automaton.alphabet:
        if not _is_token(symbol):
            raise MalformedAutomatonError(f"invalid alphabet symbol {symbol!r}")
        if symbol in seen:
            raise MalformedAutomatonError(f"duplicate alphabet symbol {symbol!r}")
        seen.add(symbol)

    if not _is_index(automaton.initial, size):
        raise MalformedAutomatonError(
            f"initial state {automaton.initial!r} is not one of {size} states"
        )
    for state in automaton.accepting:
        if not _is_index(state, size):
            raise MalformedAutomatonError(f"accepting state {state!r} does not exist")

    pairs: Set[Tuple[int, str]] = set()
    for trans in set(automaton.transitions):
        if not _is_index(trans.source, size):
            raise MalformedAutomatonError(f"{trans!r} leaves an unknown state")
        if not _is_index(trans.target, size):
            raise MalformedAutomatonError(f"{trans!r} enters an unknown state")
        if trans.symbol != EPSILON and trans.symbol not in seen:
            raise MalformedAutomatonError(
                f"{trans!r} uses symbol {trans.symbol!r} outside the alphabet"
            )
        if automaton.deterministic:
            if trans.is_epsilon():
                raise MalformedAutomatonError(
                    f"deterministic automaton has epsilon {trans!r}"
                )
            key = (trans.source, trans.symbol)
            if key in pairs:
                raise MalformedAutomatonError(
                    f"deterministic automaton has several transitions from state "
                    f"{trans.source} on {trans.symbol!r}"
                )
            pairs.add(key)

    if automaton.names is not None:
        if len(automaton.names) != size:
            raise MalformedAutomatonError(
                f"{len(automaton.names)} names given for {size} states"
            )
        if not all(_is_token(name) for name in automaton.names):
            raise MalformedAutomatonError(
                "state names must be non-empty words not starting with '#'"
            )
        if len(set(automaton.names)) != size:
            raise MalformedAutomatonError("state names must be unique")


class AutomatonBuilder:
    """Mutable accumulator producing an immutable Automaton.

    Example:
        >>> builder = AutomatonBuilder(["a", "b"])
        >>> start = builder.add_state()
        >>> end = builder.add_state(accepting=True)
        >>> builder.add_transition(start, "b", end)
        >>> dfa = builder.build(deterministic=True)
    """

    def __init__(self, alphabet: Iterable[str] = ()) -> None:
        self.alphabet: List[str] = []
        self._names: List[Optional[str]] = []
        self._by_name: Dict[str, int] = {}
        self._initial = 0
        self._accepting: Set[int] = set()
        self._transitions: Set[Transition] = set()
        for symbol in alphabet:
            self.add_symbol(symbol)

    @property
    def size(self) -> int:
        return len(self._names)

    def add_state(self, name: Optional[str] = None, accepting: bool = False) -> int:
        """Append a new state and return its index."""
        index = len(self._names)
        self._names.append(name)
        if name is not None:
            self._by_name.setdefault(name, index)
        if accepting:
            self._accepting.add(index)
        return index

    def find(self, name: str) -> Optional[int]:
        """Get the index of a named state, if present."""
        return self._by_name.get(name)

    def add_symbol(self, symbol: str) -> None:
        if symbol not in self.alphabet:
            self.alphabet.append(symbol)

    def add_transition(self, source: int, symbol: str, target: int) -> None:
        self._transitions.add(Transition(source, symbol, target))

    def set_initial(self, state: int) -> None:
        self._initial = state

    def mark_accepting(self, state: int) -> None:
        self._accepting.add(state)

    def build(self, deterministic: bool = False) -> Automaton:
        """Freeze the accumulated parts into an Automaton.

        Raises:
            MalformedAutomatonError: If the parts violate an invariant, or if
                only some of the states were named.
        """
        names = None
        if any(name is not None for name in self._names):
            if any(name is None for name in self._names):
                raise MalformedAutomatonError("either all states are named or none")
            names = tuple(self._names)
        return Automaton(
            size=len(self._names),
            alphabet=tuple(self.alphabet),
            initial=self._initial,
            accepting=frozenset(self._accepting),
            transitions=tuple(self._transitions),
            deterministic=deterministic,
            names=names,
        )
