"""Structured errors raised by policybook."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class PolicyBookError(Exception):
    """Base error for the package."""

    message: str
    code: str = "policybook_error"
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class InvalidPolicyInputError(PolicyBookError, ValueError):
    """Raised when text is not a policy id or a combined policy input."""

    code: str = "invalid_policy_input"
    value: Optional[str] = None
