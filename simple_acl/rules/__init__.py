"""
Rules engine package.

Defines the rule model, the per-query results and the access control list
that evaluates them. A query expands aggregate roles and resources into
names, collects the result of every matching rule and resolves them by
priority into a single allow/deny decision.

Modules of interest:
- models: Rule and RuleWide.
- results: RuleResult and RuleResultCollection.
- engine: Acl, the registry and query orchestration.
"""

from .models import Rule, RuleWide
from .results import RuleResult, RuleResultCollection
from .engine import Acl, RuleFactory

__all__ = ["Rule", "RuleWide", "RuleResult", "RuleResultCollection", "Acl", "RuleFactory"]
