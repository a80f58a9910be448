"""Custom exceptions for autotrans."""


class AutomatonError(Exception):
    """Base exception for all autotrans errors."""

    pass


class MalformedAutomatonError(AutomatonError):
    """Raised when an automaton violates a structural invariant."""

    pass


class AlphabetMismatchError(AutomatonError):
    """Raised when combining automata over different alphabets."""

    pass


class EmptyAlphabetError(AutomatonError):
    """Raised when determinizing an automaton with transitions but no symbols."""

    pass


class SymbolNotInAlphabetError(AutomatonError):
    """Raised when a word contains a symbol outside the automaton's alphabet."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"symbol {symbol!r} is not in the alphabet")


class StateLimitError(AutomatonError):
    """Raised when a construction grows past the configured state limit."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"construction exceeds the limit of {limit} states")


class FormatError(AutomatonError):
    """Raised when an automaton description cannot be parsed."""

    def __init__(self, message: str, line: int = -1) -> None:
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        if self.line >= 0:
            return f"{super().__str__()} at line {self.line}"
        return super().__str__()


class StageError(AutomatonError):
    """Raised by the pipeline when one of its stages fails."""

    def __init__(self, stage: str, cause: Exception) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage}: {cause}")


class InternalConsistencyError(RuntimeError):
    """Raised when an algorithm breaks one of its own invariants.

    Signals a bug rather than bad input; it is not an AutomatonError.
    """

    pass
