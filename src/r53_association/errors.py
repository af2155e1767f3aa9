"""Exception hierarchy for association lifecycle operations."""

from __future__ import annotations


class AssociationError(Exception):
    """Base class for every failure surfaced by this package."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


class MalformedHandleError(AssociationError):
    """Raised when an association handle cannot be decoded."""

    def __init__(self, handle: str) -> None:
        super().__init__(
            f"Unexpected format of ID ({handle!r}), expected ZONEID:VPCID",
            code="malformed_handle",
        )
        self.handle = handle


class RemoteRejectedError(AssociationError):
    """Raised when a Route 53 call fails for a reason other than a recognized conflict."""

    def __init__(self, message: str, error_code: str = "Unknown") -> None:
        super().__init__(message, code="remote_rejected")
        self.error_code = error_code


class PatternMatchError(AssociationError):
    """Raised when the already-associated check itself cannot be evaluated."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="pattern_match_failure")


class ConvergenceTimeoutError(AssociationError):
    """Raised when a wait exceeds its deadline without reaching a target state."""

    def __init__(
        self,
        last_state: str,
        timeout_seconds: float,
        target: tuple[str, ...] = ("INSYNC",),
    ) -> None:
        super().__init__(
            f"timeout while waiting for state to become {' or '.join(target)} "
            f"(last state: {last_state!r}, timeout: {timeout_seconds:g}s)",
            code="convergence_timeout",
        )
        self.last_state = last_state
        self.timeout_seconds = timeout_seconds
        self.target = target


class UnexpectedStateError(AssociationError):
    """Raised when a refresh reports a state that is neither pending nor a target."""

    def __init__(self, state: str, expected: tuple[str, ...]) -> None:
        super().__init__(
            f"unexpected state {state!r}, wanted target {', '.join(expected)!r}",
            code="unexpected_state",
        )
        self.state = state


class NotFoundError(AssociationError):
    """Raised when a hosted zone or association does not exist."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="not_found")


class VerificationError(AssociationError):
    """Raised when remote state disagrees with an expected presence or absence."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="verification_failed")
