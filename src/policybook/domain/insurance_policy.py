# src/policybook/domain/insurance_policy.py
"""
InsurancePolicy value object.

A policy reference attached to a contact: a ``Policy_NNNN`` id plus an
optional link to the policy document. The id is fixed once the object exists;
the URL can be replaced or cleared.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional


CHECK_POLICY_ID_REGEX = "Policy_[0-9]{4}"
CHECK_POLICY_INPUT_REGEX = "Policy_[0-9]{4}(>.*)?"
POLICY_URL_SEPARATOR = ">"
NO_URL_TEXT = "No URL!"
MESSAGE_CONSTRAINTS = (
    "PolicyIDs should be of the form 'Policy_****'. "
    "URLs should be preceded by '>' after the PolicyID."
)

_POLICY_ID_RE = re.compile(CHECK_POLICY_ID_REGEX)
_POLICY_INPUT_RE = re.compile(CHECK_POLICY_INPUT_REGEX)


@dataclass(unsafe_hash=True)
class InsurancePolicy:
    """
    Insurance policy reference held by a contact.

    Equality and hashing use ``(policy_id, policy_url)``. An absent URL only
    equals another absent URL.

    The id format is not checked here; use ``is_policy_id`` or
    ``is_valid_policy_input`` before constructing when the format matters.
    """

    policy_id: str
    policy_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.policy_id is None:
            raise TypeError("policy_id must not be None")

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "policy_id" and "policy_id" in self.__dict__:
            raise AttributeError("policy_id cannot be reassigned")
        super().__setattr__(name, value)

    def get_policy_url_if_present(self) -> Optional[str]:
        """Return the document URL, or None when no URL is set."""
        return self.policy_url

    def set_policy_url(self, url: Optional[str]) -> None:
        """Replace the document URL. Passing None clears it."""
        self.policy_url = url

    def __str__(self) -> str:
        if self.policy_url is None:
            return f"{self.policy_id}: {NO_URL_TEXT}"
        return f"{self.policy_id}: {self.policy_url}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "policy_id": self.policy_id,
            "policy_url": self.policy_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InsurancePolicy":
        """Create instance from dictionary."""
        return cls(
            policy_id=data.get("policy_id"),
            policy_url=data.get("policy_url"),
        )

    @staticmethod
    def is_policy_id(test: Optional[str]) -> bool:
        """Check that ``test`` is exactly ``Policy_`` followed by four digits."""
        return _POLICY_ID_RE.fullmatch(test or "") is not None

    @staticmethod
    def is_valid_policy_input(test: Optional[str]) -> bool:
        """Check that ``test`` is a policy id, optionally followed by ``>`` and a URL."""
        return _POLICY_INPUT_RE.fullmatch(test or "") is not None
