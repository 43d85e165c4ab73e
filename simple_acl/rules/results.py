"""
Per-query rule results and their priority resolution.
"""

import itertools
from typing import TYPE_CHECKING, Any, Iterator, List, Optional

if TYPE_CHECKING:
    from .models import Rule


_UNRESOLVED = object()
_result_ids = itertools.count(1)


class RuleResult:
    """
    Outcome of matching one rule against one concrete role/resource pair.

    The action is resolved on first access and cached, so a callable action
    runs at most once per result. A result created for a rule that does not
    apply resolves to ``None`` without consulting the rule.
    """

    def __init__(
        self,
        rule: "Rule",
        priority: int,
        need_role_name: Optional[str],
        need_resource_name: Optional[str],
        applicable: bool = True
    ):
        self.result_id = next(_result_ids)
        self.rule = rule
        self.priority = priority
        self.need_role_name = need_role_name
        self.need_resource_name = need_resource_name
        self.role_aggregate = rule.role_aggregate
        self.resource_aggregate = rule.resource_aggregate
        self._action: Any = _UNRESOLVED if applicable else None

    def __repr__(self) -> str:
        return (
            f"RuleResult(rule={self.rule.name!r}, role={self.need_role_name!r}, "
            f"resource={self.need_resource_name!r}, priority={self.priority})"
        )

    @property
    def action(self) -> Optional[bool]:
        if self._action is _UNRESOLVED:
            self._action = self.rule.get_action(self)
        return self._action


class RuleResultCollection:
    """Accumulates decisive results of one query and picks the winner."""

    def __init__(self):
        self.collection: List[RuleResult] = []

    def __len__(self) -> int:
        return len(self.collection)

    def __iter__(self) -> Iterator[RuleResult]:
        return iter(self.collection)

    def add(self, result: Optional[RuleResult]) -> None:
        """Add a result, ignoring rules that declined to apply."""
        if result is None or result.action is None:
            return
        self.collection.append(result)

    def is_empty(self) -> bool:
        return not self.collection

    def get_result(self) -> Optional[RuleResult]:
        """Return the deciding result: highest priority, latest on ties."""
        best: Optional[RuleResult] = None
        for result in self.collection:
            if best is None or result.priority >= best.priority:
                best = result
        return best

    def get(self) -> bool:
        """Final decision; ``False`` when nothing applied."""
        best = self.get_result()
        if best is None:
            return False
        return bool(best.action)
