"""Exception types for the reflect conversion engine.

Kernel arithmetic errors are re-exported here so callers only need one import.
`ReflectGuardError` and `ReflectInvariantError` are raised by callers that
prefer exceptions over inspecting guard reasons or invariant lists.
"""

from __future__ import annotations

from ...kernels.python.wide import DivisionByZero, Overflow, Underflow, WideArithmeticError


class ReflectError(Exception):
    """Base class for conversion-engine failures that are not arithmetic."""


class ReflectGuardError(ReflectError):
    """Raised when a caller precondition is not satisfied."""


class ReflectInvariantError(ReflectError):
    """Raised when converted shares violate one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class BurnNotImplementedError(ReflectError, NotImplementedError):
    """Burn conversion is a declared but unimplemented extension point."""


__all__ = [
    "WideArithmeticError",
    "DivisionByZero",
    "Overflow",
    "Underflow",
    "ReflectError",
    "ReflectGuardError",
    "ReflectInvariantError",
    "BurnNotImplementedError",
]
