"""Staged transformation runner."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from autotrans.automaton.boolean import complement, difference, intersection, union
from autotrans.automaton.determinize import determinize
from autotrans.automaton.minimize import minimize
from autotrans.automaton.model import Automaton
from autotrans.automaton.trim import trim, validate
from autotrans.config import Config
from autotrans.exceptions import AutomatonError, StageError

logger = logging.getLogger(__name__)


class Stage(Enum):
    """Pipeline stages, named in error reports."""

    VALIDATE = "validate"
    COMBINE = "combine"
    DETERMINIZE = "determinize"
    MINIMIZE = "minimize"
    OUTPUT = "output"


class Operation(Enum):
    """Boolean operations available in the combine stage."""

    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"
    COMPLEMENT = "complement"

    @property
    def is_binary(self) -> bool:
        return self is not Operation.COMPLEMENT


@dataclass
class Options:
    """Which transformations to apply.

    Attributes:
        determinize: Run subset construction.
        minimize: Minimize (implies determinize).
        trim: Trim the input and the final result.
        operation: Boolean operation to apply, if any.
    """

    determinize: bool = False
    minimize: bool = False
    trim: bool = False
    operation: Optional[Operation] = None

    def selected(self) -> bool:
        """Check whether any transformation was explicitly requested."""
        return self.determinize or self.minimize or self.trim or self.operation is not None

    def runs_determinize(self) -> bool:
        return self.determinize or self.minimize or not self.selected()


@contextmanager
def stage(name: Stage) -> Iterator[None]:
    """Attribute any automaton or I/O error raised inside the block to a stage.

    Raises:
        StageError: Wrapping the original error.
    """
    logger.info("stage: %s", name.value)
    try:
        yield
    except StageError:
        raise
    except (AutomatonError, OSError) as e:
        raise StageError(name.value, e) from e


def run_pipeline(
    automaton: Automaton,
    options: Options,
    operand: Optional[Automaton] = None,
    config: Optional[Config] = None,
) -> Automaton:
    """Apply the selected transformations in order.

    The order is validate, combine, determinize, minimize; with ``trim`` the
    input is trimmed during validation and the result once more at the end.
    With nothing selected the automaton is only determinized.

    Args:
        automaton: The input automaton.
        options: Selected transformations.
        operand: Right operand of a binary operation.
        config: Optional configuration.

    Returns:
        The transformed automaton.

    Raises:
        StageError: Naming the stage that failed.
        ValueError: If a binary operation is selected without an operand.
    """
    config = config or Config.default()
    operation = options.operation
    if operation is not None and operation.is_binary and operand is None:
        raise ValueError(f"{operation.value} needs a second automaton")

    with stage(Stage.VALIDATE):
        result = validate(automaton)
        if operand is not None:
            validate(operand)
        if options.trim:
            result = trim(result)

    if operation is not None:
        with stage(Stage.COMBINE):
            if operation is Operation.COMPLEMENT:
                result = complement(result, config)
            elif operation is Operation.UNION:
                result = union(result, operand, config)
            elif operation is Operation.INTERSECTION:
                result = intersection(result, operand, config)
            else:
                result = difference(result, operand, config)

    if options.runs_determinize():
        with stage(Stage.DETERMINIZE):
            result = determinize(result, config)

    if options.minimize:
        with stage(Stage.MINIMIZE):
            result = minimize(result, config)

    if options.trim:
        result = trim(result)

    logger.info("result: %d states, %d transitions", result.size, len(result.transitions))
    return result
