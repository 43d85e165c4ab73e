"""
simple-acl: in-process access control decisions.

- simple_acl.rules: Acl, Rule and result resolution.
- simple_acl.identity: roles, resources and aggregates.

Errors raised by the engine live in shared.errors.
"""

from shared.errors import AclException, InvalidArgumentError, AclRuntimeError

from .identity import (
    Role, Resource, RoleAggregate, ResourceAggregate,
    RoleAggregateInterface, ResourceAggregateInterface
)
from .rules import Acl, Rule, RuleWide, RuleResult, RuleResultCollection

__all__ = [
    "Acl", "Rule", "RuleWide", "RuleResult", "RuleResultCollection",
    "Role", "Resource", "RoleAggregate", "ResourceAggregate",
    "RoleAggregateInterface", "ResourceAggregateInterface",
    "AclException", "InvalidArgumentError", "AclRuntimeError",
]
