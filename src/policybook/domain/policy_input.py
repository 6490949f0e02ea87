"""Parsing of combined ``Policy_NNNN>url`` user input."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from policybook.core.errors import InvalidPolicyInputError
from policybook.domain.insurance_policy import (
    MESSAGE_CONSTRAINTS,
    POLICY_URL_SEPARATOR,
    InsurancePolicy,
)
from policybook.utils.logging_config import LogFiles, Logger


def split_policy_input(text: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Split combined input into ``(policy_id, url)``.

    Only the first ``>`` separates id from URL; later ones belong to the URL.
    A blank URL after the separator counts as no URL.

    Raises:
        InvalidPolicyInputError: if the text is not a valid combined input.
    """
    raw = (text or "").strip()
    if not InsurancePolicy.is_valid_policy_input(raw):
        raise InvalidPolicyInputError(message=MESSAGE_CONSTRAINTS, value=text)

    policy_id, _, url = raw.partition(POLICY_URL_SEPARATOR)
    url = url.strip()
    return policy_id, (url or None)


def parse_policy_input(text: Optional[str]) -> InsurancePolicy:
    """Build an InsurancePolicy from combined input text."""
    try:
        policy_id, url = split_policy_input(text)
    except InvalidPolicyInputError:
        Logger.warning(f"Rejected policy input: {text!r}", file=LogFiles.POLICY)
        raise

    policy = InsurancePolicy(policy_id, url)
    Logger.info(f"Parsed policy input as {policy}", file=LogFiles.POLICY)
    return policy


def parse_policy_inputs(texts: Iterable[Optional[str]]) -> List[InsurancePolicy]:
    """Parse several inputs in order, keeping the first of any equal policies."""
    policies: List[InsurancePolicy] = []
    seen = set()
    for text in texts:
        policy = parse_policy_input(text)
        if policy in seen:
            Logger.debug(f"Skipping duplicate policy {policy}", file=LogFiles.POLICY)
            continue
        seen.add(policy)
        policies.append(policy)
    return policies
