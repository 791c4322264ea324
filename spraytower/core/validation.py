# spraytower/core/validation.py
"""Unified validation and exceptions for all modules"""
from typing import Union, Mapping, Any
import math
import numbers


class ScrubberError(Exception):
    """Base exception for all spray tower calculations"""
    pass


class InputError(ScrubberError):
    """Invalid input parameters"""
    pass


class UnknownPollutantError(InputError):
    """Pollutant type has no entry in the property library"""
    pass


class UnknownNozzleError(InputError):
    """Nozzle type has no entry in the property library"""
    pass


class ConvergenceError(ScrubberError):
    """Numerical method failed to converge"""
    pass


def check_finite(name: str, value: Union[float, int]) -> float:
    """Check value is a finite number"""
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InputError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(v):
        raise InputError(f"{name} must be finite, got {v}")
    return v


def check_positive(name: str, value: Union[float, int]) -> float:
    """Check value is positive"""
    v = check_finite(name, value)
    if v <= 0:
        raise InputError(f"{name} must be > 0, got {v}")
    return v


def check_non_negative(name: str, value: Union[float, int]) -> float:
    """Check value is non-negative"""
    v = check_finite(name, value)
    if v < 0:
        raise InputError(f"{name} must be >= 0, got {v}")
    return v


def check_in_open_01(name: str, value: float) -> float:
    """Check value in (0, 1)"""
    v = check_finite(name, value)
    if not (0.0 < v < 1.0):
        raise InputError(f"{name} must satisfy 0 < {name} < 1, got {v}")
    return v


def check_known_keys(name: str, data: Mapping[str, Any], allowed) -> None:
    """Reject mapping keys that do not name a field"""
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise InputError(f"Unknown {name} field(s): {', '.join(unknown)}")


def check_non_negative_int(name: str, value: Any) -> int:
    """Check value is an integer >= 0 (bools are rejected)"""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InputError(f"{name} must be an integer, got {value!r}")
    return int(check_non_negative(name, value))
