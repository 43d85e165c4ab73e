"""
Rule data models for the ACL engine.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from ..identity.models import Identity, Role, Resource
from .results import RuleResult


@dataclass(eq=False)
class Rule:
    """
    A policy statement: optional role, optional resource, permission name,
    action and priority.

    ``action`` is ``None`` (rule does not apply), a plain value, or a callable
    that receives the ``RuleResult`` being resolved. Anything other than
    ``None`` is coerced to ``bool``.
    """

    name: str
    action: Any = None
    priority: int = 0
    rule_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    role: Optional[Role] = None
    resource: Optional[Resource] = None
    role_aggregate: Any = field(default=None, repr=False)
    resource_aggregate: Any = field(default=None, repr=False)

    def reset_aggregate(self, role_aggregate: Any, resource_aggregate: Any) -> None:
        """Bind the query objects the current match attempt was made with."""
        self.role_aggregate = role_aggregate
        self.resource_aggregate = resource_aggregate

    def is_rule_matched(self, need_rule_name: Optional[str]) -> bool:
        return self.name == need_rule_name

    def get_action(self, rule_result: Optional[RuleResult] = None) -> Optional[bool]:
        action = self.action
        if callable(action):
            # Deferred actions need the match context.
            if rule_result is None:
                return None
            action = action(rule_result)

        if action is None:
            return None
        return bool(action)

    def is_allowed(
        self,
        need_rule_name: Optional[str],
        need_role_name: Optional[str],
        need_resource_name: Optional[str]
    ) -> RuleResult:
        """Match against one concrete role/resource name pair."""
        if not self.is_rule_matched(need_rule_name):
            return self._declined(need_role_name, need_resource_name)

        role_depth = _match_depth(self.role, need_role_name)
        if role_depth is None:
            return self._declined(need_role_name, need_resource_name)

        resource_depth = _match_depth(self.resource, need_resource_name)
        if resource_depth is None:
            return self._declined(need_role_name, need_resource_name)

        return RuleResult(
            self,
            self.priority - role_depth - resource_depth,
            need_role_name,
            need_resource_name
        )

    def _declined(self, need_role_name: Optional[str], need_resource_name: Optional[str]) -> RuleResult:
        return RuleResult(self, self.priority, need_role_name, need_resource_name, applicable=False)


class RuleWide(Rule):
    """Rule that applies to every permission name."""

    def is_rule_matched(self, need_rule_name: Optional[str]) -> bool:
        return True


def _match_depth(bound: Optional[Identity], need_name: Optional[str]) -> Optional[int]:
    # An unbound role or resource applies to every name.
    if bound is None:
        return 0
    return bound.find_depth(need_name)
