"""
Cooperative cancellation for long sweeps.

A host that wants to abort a computation holds a CancellationToken and
calls cancel(); the computation polls check() at safe points. Tokens are
passed explicitly -- there is no global interrupt flag.
"""

from __future__ import annotations

from pycoxsurv.core.exceptions import CancelledError


class CancellationToken:
    """
    Explicit, passed-in cancellation flag.

    Usage:
        token = CancellationToken()
        # ... from the host, possibly another thread:
        token.cancel()
        # ... inside the computation:
        token.check()   # raises CancelledError once cancelled
    """

    __slots__ = ('_cancelled', '_reason')

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation. Idempotent; the first reason wins."""
        if not self._cancelled:
            self._cancelled = True
            self._reason = reason

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def check(self, n_strata_done: int | None = None) -> None:
        """
        Raise CancelledError if cancel() has been called.

        Args:
            n_strata_done: Progress marker attached to the raised error
        """
        if self._cancelled:
            msg = "risk-set computation cancelled"
            if self._reason:
                msg = f"{msg}: {self._reason}"
            raise CancelledError(msg, n_strata_done=n_strata_done)

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"
