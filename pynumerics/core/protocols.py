"""
Core protocols for PyNumerics.

These define structural interfaces that algorithm implementations must
satisfy. We use Protocol (structural typing) rather than ABC (nominal
typing) so third-party backends need not inherit from anything here.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pynumerics.core.result import Result

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes an immutable design (a frozen snapshot of the
    input values) and produces a parameter payload wrapped in a Result.

    Backends are stateless: all configuration is passed via the design
    or at construction time. Two factorizations never share mutable
    state, so independent designs may be solved from different threads.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_mgs'.
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the computation.

        Args:
            design: Validated, immutable input snapshot

        Returns:
            Result envelope containing parameter payload and metadata
        """
        ...
