"""Parser for the sectioned automaton text format.

A description is made of four sections, each introduced by a header line
and a count line::

    Estados
    3
    q0 q1 q2

    Estados de aceptación
    1
    q2

    Alfabeto
    2
    a b

    Transiciones
    3
    q0 a q1
    q1 -1 q2
    q2 b q0

The first listed state is the initial state and ``-1`` stands for epsilon.
English headers (``States``, ``Accepting states``, ``Alphabet``,
``Transitions``) are accepted as well. A header is only recognised once the
previous section holds all the items its count announced, so a state named
``Estados`` reads back as a state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from autotrans.automaton.model import EPSILON, Automaton, AutomatonBuilder
from autotrans.config import Config
from autotrans.exceptions import FormatError, MalformedAutomatonError


class Section(Enum):
    """Sections of an automaton description."""

    STATES = "states"
    ACCEPTING = "accepting states"
    ALPHABET = "alphabet"
    TRANSITIONS = "transitions"


HEADERS: Dict[str, Section] = {
    "estados": Section.STATES,
    "states": Section.STATES,
    "estados de aceptación": Section.ACCEPTING,
    "estados de aceptacion": Section.ACCEPTING,
    "accepting states": Section.ACCEPTING,
    "alfabeto": Section.ALPHABET,
    "alphabet": Section.ALPHABET,
    "transiciones": Section.TRANSITIONS,
    "transitions": Section.TRANSITIONS,
}

Token = Tuple[int, str]  # (line number, text)


@dataclass
class _Block:
    """Raw lines collected under one header."""

    section: Section
    line: int
    count: Optional[int] = None
    lines: List[Tuple[int, List[str]]] = field(default_factory=list)

    def tokens(self) -> List[Token]:
        return [(line, word) for line, words in self.lines for word in words]

    def is_full(self) -> bool:
        """Check whether the block holds as many items as its count announced."""
        if self.count is None:
            return False
        if self.section is Section.TRANSITIONS:
            return len(self.lines) >= self.count
        return sum(len(words) for _, words in self.lines) >= self.count

    def check_count(self, found: int, what: str) -> None:
        expected = self.count or 0
        if found != expected:
            raise FormatError(f"expected {expected} {what}, found {found}", self.line)


class AutomatonParser:
    """Parse automaton descriptions into Automaton values."""

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config.default()

    def parse(self, text: str) -> Automaton:
        """Parse a full description.

        Args:
            text: The description.

        Returns:
            The automaton; its states are named after the description.

        Raises:
            FormatError: With the offending line number.
        """
        blocks = self._split(text)
        if Section.STATES not in blocks:
            raise FormatError("missing states section")

        builder = AutomatonBuilder()
        self._read_states(blocks[Section.STATES], builder)
        if Section.ALPHABET in blocks:
            self._read_alphabet(blocks[Section.ALPHABET], builder)
        if Section.ACCEPTING in blocks:
            self._read_accepting(blocks[Section.ACCEPTING], builder)
        if Section.TRANSITIONS in blocks:
            self._read_transitions(blocks[Section.TRANSITIONS], builder)

        builder.set_initial(0)
        try:
            return builder.build()
        except MalformedAutomatonError as e:
            raise FormatError(f"invalid automaton: {e}") from e

    def _split(self, text: str) -> Dict[Section, _Block]:
        blocks: Dict[Section, _Block] = {}
        current: Optional[_Block] = None

        for number, raw in enumerate(text.splitlines(), 1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            # Inside an unfinished block a line is data, even if it reads like a header
            section = None
            if current is None or current.is_full():
                section = HEADERS.get(" ".join(line.lower().split()))
            if section is not None:
                if section in blocks:
                    raise FormatError(f"duplicate section {line!r}", number)
                current = _Block(section, number)
                blocks[section] = current
                continue

            if current is None:
                raise FormatError(f"unexpected line {line!r}", number)

            if current.count is None:
                try:
                    current.count = int(line)
                except ValueError:
                    raise FormatError(f"expected a count, got {line!r}", number) from None
                if current.count < 0:
                    raise FormatError(f"negative count {current.count}", number)
                continue

            current.lines.append((number, line.split()))

        return blocks

    def _read_states(self, block: _Block, builder: AutomatonBuilder) -> None:
        tokens = block.tokens()
        block.check_count(len(tokens), "states")
        for line, name in tokens:
            if builder.find(name) is not None:
                raise FormatError(f"duplicate state {name!r}", line)
            builder.add_state(name)

    def _read_accepting(self, block: _Block, builder: AutomatonBuilder) -> None:
        tokens = block.tokens()
        block.check_count(len(tokens), "accepting states")
        for line, name in tokens:
            builder.mark_accepting(self._state(builder, name, line))

    def _read_alphabet(self, block: _Block, builder: AutomatonBuilder) -> None:
        tokens = block.tokens()
        block.check_count(len(tokens), "symbols")
        for line, symbol in tokens:
            if symbol == self.config.epsilon_token:
                raise FormatError(f"epsilon token {symbol!r} in alphabet", line)
            if symbol in builder.alphabet:
                raise FormatError(f"duplicate symbol {symbol!r}", line)
            builder.add_symbol(symbol)

    def _read_transitions(self, block: _Block, builder: AutomatonBuilder) -> None:
        block.check_count(len(block.lines), "transitions")
        for line, words in block.lines:
            if len(words) != 3:
                raise FormatError("transition must be 'source symbol target'", line)
            source, symbol, target = words
            if symbol == self.config.epsilon_token:
                symbol = EPSILON
            elif symbol not in builder.alphabet:
                raise FormatError(f"unknown symbol {symbol!r}", line)
            builder.add_transition(
                self._state(builder, source, line),
                symbol,
                self._state(builder, target, line),
            )

    @staticmethod
    def _state(builder: AutomatonBuilder, name: str, line: int) -> int:
        index = builder.find(name)
        if index is None:
            raise FormatError(f"unknown state {name!r}", line)
        return index


def parse(text: str, config: Optional[Config] = None) -> Automaton:
    """Parse an automaton description.

    Raises:
        FormatError: If the description is malformed.
    """
    return AutomatonParser(config).parse(text)


def parse_file(path: str, config: Optional[Config] = None) -> Automaton:
    """Read and parse an automaton description from a file.

    Raises:
        FormatError: If the description is malformed.
        OSError: If the file cannot be read.
    """
    with open(path, encoding="utf-8") as f:
        return parse(f.read(), config)
