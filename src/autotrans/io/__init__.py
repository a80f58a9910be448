"""Reading and writing automaton descriptions."""

from autotrans.io.parser import AutomatonParser, parse, parse_file
from autotrans.io.serializer import serialize, write_file

__all__ = [
    "AutomatonParser",
    "parse",
    "parse_file",
    "serialize",
    "write_file",
]
