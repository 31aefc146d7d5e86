"""Observability for access control checks."""

from shared_kernel.authorization.observability.access_policy_probe import (
    AccessPolicyProbe,
    DefaultAccessPolicyProbe,
)

__all__ = [
    "AccessPolicyProbe",
    "DefaultAccessPolicyProbe",
]
