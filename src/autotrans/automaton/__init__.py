"""Automaton model and transformation algorithms."""

from autotrans.automaton.model import EPSILON, Automaton, AutomatonBuilder, Transition
from autotrans.automaton.trim import (
    empty_automaton,
    live_states,
    reachable_states,
    restrict,
    trim,
    validate,
)
from autotrans.automaton.determinize import (
    complete,
    determinize,
    subset_construction,
    subset_names,
)
from autotrans.automaton.minimize import minimize
from autotrans.automaton.boolean import (
    complement,
    difference,
    intersection,
    product,
    union,
)
from autotrans.automaton.equivalence import (
    accepts,
    canonical,
    counterexample,
    is_empty,
    is_isomorphic,
    language_equals,
)

__all__ = [
    "EPSILON",
    "Automaton",
    "AutomatonBuilder",
    "Transition",
    "validate",
    "reachable_states",
    "live_states",
    "restrict",
    "empty_automaton",
    "trim",
    "determinize",
    "subset_construction",
    "subset_names",
    "complete",
    "minimize",
    "product",
    "union",
    "intersection",
    "difference",
    "complement",
    "accepts",
    "canonical",
    "counterexample",
    "is_empty",
    "is_isomorphic",
    "language_equals",
]
