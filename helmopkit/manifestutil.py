"""Helpers for inspecting rendered manifests."""

from __future__ import annotations

from typing import Mapping, Optional

RESOURCE_POLICY_ANNOTATION = "helm.sh/resource-policy"
KEEP_POLICY = "keep"


def has_resource_policy_keep(annotations: Optional[Mapping[str, str]]) -> bool:
    """Return whether the annotations ask for the resource to be kept.

    The policy value is compared case-insensitively, ignoring surrounding
    whitespace.
    """
    if annotations is None:
        return False
    policy = annotations.get(RESOURCE_POLICY_ANNOTATION)
    if policy is None:
        return False
    return policy.strip().lower() == KEEP_POLICY