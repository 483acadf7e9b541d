"""
Generic result container for PyNumerics computations.

Every factorization backend returns a Result wrapping its own parameter
payload, so timing, diagnostics and non-fatal warnings travel the same
way regardless of the algorithm.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, rank, shape)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a factorization cannot be edited after the fact
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for numerical computations.

    Type Parameters:
        P: The algorithm-specific parameter payload type

    Attributes:
        params: Algorithm-specific payload (factors, rank, determinant, ...)
        info: Structured metadata (method, rank, shape, field)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=QRParams(Q=Q, R=R, rank=3, determinant=None, zero_columns=()),
        ...     info={'method': 'modified_gram_schmidt', 'rank': 3},
        ...     timing={'total_seconds': 0.001, 'orthogonalize': 0.0008},
        ...     backend_name='cpu_mgs'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
