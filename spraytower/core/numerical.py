# spraytower/core/numerical.py
"""Numerical helpers shared by the scrubber stages"""
from dataclasses import dataclass
from typing import Callable, Optional
import math

from .validation import check_positive


@dataclass(frozen=True)
class Guarded:
    """
    Outcome of a calculation with a zero-guard.

    Either a computed value, or an undefined (degenerate) case where the
    physical quantity has no meaning for the given inputs. Degenerate
    outcomes carry the reason and report 0.0 as their value so downstream
    stages stay finite; callers decide whether to surface the reason.
    """
    value: float
    degenerate: bool = False
    reason: Optional[str] = None

    @classmethod
    def computed(cls, value: float) -> "Guarded":
        return cls(float(value))

    @classmethod
    def undefined(cls, reason: str) -> "Guarded":
        return cls(0.0, True, reason)

    def __float__(self) -> float:
        return self.value


def guarded_divide(numerator: float, denominator: float, reason: str) -> Guarded:
    """numerator / denominator, or undefined when the denominator is not > 0"""
    if denominator > 0:
        return Guarded.computed(numerator / denominator)
    return Guarded.undefined(reason)


@dataclass(frozen=True)
class FixedPointResult:
    """Result of a bounded fixed-point iteration"""
    value: float
    iterations: int
    converged: bool
    last_step: float


def fixed_point(
    g: Callable[[float], float],
    x0: float,
    tol: float = 1e-3,
    maxiter: int = 10,
) -> FixedPointResult:
    """
    Bounded fixed-point iteration x_{k+1} = g(x_k).

    Stops when |x_{k+1} - x_k| < tol or after maxiter updates, whichever
    comes first. Non-convergence is not an error: the last iterate is
    returned with converged=False.
    """
    check_positive("tol", tol)
    check_positive("maxiter", maxiter)

    x = float(x0)
    step = math.inf
    for k in range(1, int(maxiter) + 1):
        x_new = g(x)
        step = abs(x_new - x)
        x = x_new
        if step < tol:
            return FixedPointResult(x, k, True, step)

    return FixedPointResult(x, int(maxiter), False, step)
