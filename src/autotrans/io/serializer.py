"""Serializer for the sectioned automaton text format."""

from typing import List, Optional

from autotrans.automaton.model import Automaton
from autotrans.config import Config


def serialize(automaton: Automaton, config: Optional[Config] = None) -> str:
    """Write an automaton in the format read by autotrans.io.parser.

    The initial state is listed first; states without names are written as
    their indices.

    Args:
        automaton: The automaton to write.
        config: Optional configuration (epsilon token).

    Returns:
        The description text.
    """
    config = config or Config.default()
    order = [automaton.initial] + [
        s for s in automaton.states() if s != automaton.initial
    ]
    name = automaton.name_of
    accepting = [s for s in order if automaton.is_accepting(s)]

    lines: List[str] = []
    lines.extend(["Estados", str(len(order)), " ".join(name(s) for s in order), ""])
    lines.extend(
        [
            "Estados de aceptación",
            str(len(accepting)),
            " ".join(name(s) for s in accepting),
            "",
        ]
    )
    lines.extend(
        ["Alfabeto", str(len(automaton.alphabet)), " ".join(automaton.alphabet), ""]
    )
    lines.extend(["Transiciones", str(len(automaton.transitions))])
    for trans in automaton.transitions:
        symbol = config.epsilon_token if trans.is_epsilon() else trans.symbol
        lines.append(f"{name(trans.source)} {symbol} {name(trans.target)}")

    return "\n".join(lines) + "\n"


def write_file(automaton: Automaton, path: str, config: Optional[Config] = None) -> None:
    """Serialize an automaton into a file.

    Raises:
        OSError: If the file cannot be written.
    """
    with open(path, "w", encoding="utf-8") as f:
        f.write(serialize(automaton, config))
