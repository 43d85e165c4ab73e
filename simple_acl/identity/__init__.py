"""
Identity package.

Roles, resources and the aggregate capabilities the rule engine expands
during a query.
"""

from .models import (
    Identity, Role, Resource,
    RoleAggregateInterface, ResourceAggregateInterface,
    BaseAggregate, RoleAggregate, ResourceAggregate
)

__all__ = [
    "Identity", "Role", "Resource",
    "RoleAggregateInterface", "ResourceAggregateInterface",
    "BaseAggregate", "RoleAggregate", "ResourceAggregate",
]
