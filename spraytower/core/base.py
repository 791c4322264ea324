# spraytower/core/base.py
"""Base classes for all modules"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Dict, Any


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class SolverBase(ABC):
    """Base class for all solvers"""

    @abstractmethod
    def solve(self) -> Any:
        """Main solving method"""
        pass

    def validate(self) -> None:
        """Validate inputs before solving"""
        pass


@dataclass(frozen=True)
class SpecificationBase:
    """Base class for all specifications and result records"""

    def validate(self) -> None:
        """Validate specification parameters"""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (enums as their values, nested specs as dicts)"""
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)
                if not f.name.startswith('_')}
