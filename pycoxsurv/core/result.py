"""
Generic result container for pycoxsurv computations.

Every computation returns its payload inside a Result envelope, so timing,
warnings and provenance are reported the same way regardless of payload.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (method, denominator, stratum count)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

import platform
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

import numpy as np

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Versions of the software stack that produced a result."""
    from pycoxsurv import __version__

    return {
        'pycoxsurv': __version__,
        'numpy': np.__version__,
        'python': platform.python_version(),
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (count tables, covariate means, ...)
        info: Structured metadata (method, options, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the code path that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Package and dependency versions

    Examples:
        >>> Result(
        ...     params=RiskSetParams(...),
        ...     info={'method': 'risk-set sweep', 'n_strata': 2},
        ...     timing={'total_seconds': 0.01, 'sweep': 0.008},
        ...     backend_name='cpu_riskset'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
