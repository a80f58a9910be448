"""
autotrans - A finite automaton transformation engine.

This library reads finite automata, determinizes and minimizes them,
combines their languages with boolean operations, and decides language
equivalence.

Example usage:
    >>> from autotrans import AutomatonBuilder, determinize, accepts
    >>> builder = AutomatonBuilder(["a", "b"])
    >>> q0 = builder.add_state()
    >>> q1 = builder.add_state(accepting=True)
    >>> builder.add_transition(q0, "a", q0)
    >>> builder.add_transition(q0, "b", q0)
    >>> builder.add_transition(q0, "b", q1)
    >>> dfa = determinize(builder.build())
    >>> accepts(dfa, "ab")
    True
"""

__version__ = "0.1.0"

from autotrans.automaton import (
    EPSILON,
    Automaton,
    AutomatonBuilder,
    Transition,
    accepts,
    canonical,
    complement,
    counterexample,
    determinize,
    difference,
    intersection,
    is_empty,
    is_isomorphic,
    language_equals,
    live_states,
    minimize,
    reachable_states,
    trim,
    union,
    validate,
)
from autotrans.config import Config
from autotrans.io import parse, parse_file, serialize, write_file
from autotrans.exceptions import (
    AlphabetMismatchError,
    AutomatonError,
    EmptyAlphabetError,
    FormatError,
    InternalConsistencyError,
    MalformedAutomatonError,
    StageError,
    StateLimitError,
    SymbolNotInAlphabetError,
)

__all__ = [
    # Model
    "EPSILON",
    "Automaton",
    "AutomatonBuilder",
    "Transition",
    # Algorithms
    "validate",
    "reachable_states",
    "live_states",
    "trim",
    "determinize",
    "minimize",
    "union",
    "intersection",
    "difference",
    "complement",
    # Queries
    "accepts",
    "canonical",
    "counterexample",
    "is_empty",
    "is_isomorphic",
    "language_equals",
    # Configuration and I/O
    "Config",
    "parse",
    "parse_file",
    "serialize",
    "write_file",
    # Exceptions
    "AutomatonError",
    "MalformedAutomatonError",
    "AlphabetMismatchError",
    "EmptyAlphabetError",
    "SymbolNotInAlphabetError",
    "StateLimitError",
    "FormatError",
    "StageError",
    "InternalConsistencyError",
    # Version
    "__version__",
]
