"""Configuration for automaton transformations."""

from dataclasses import dataclass


@dataclass
class Config:
    """Settings shared by the transformation algorithms.

    Attributes:
        complete: Produce totally defined DFAs by routing missing transitions
            to a sink state during determinization.
        max_states: Upper bound on the states a construction may create.
        epsilon_token: Token that stands for epsilon in the file format.
        log_level: Logging level used by the command line.
    """

    complete: bool = True
    max_states: int = 100000
    epsilon_token: str = "-1"
    log_level: str = "WARNING"

    @classmethod
    def default(cls) -> "Config":
        """Create the default configuration."""
        return cls()

    @classmethod
    def partial(cls) -> "Config":
        """Create a configuration that leaves missing transitions undefined."""
        return cls(complete=False)
