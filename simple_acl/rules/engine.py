"""
Rule evaluation engine: the access control list.
"""

import importlib
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from shared.config import AclSettings, get_config
from shared.errors import AclRuntimeError, InvalidArgumentError
from shared.logging import get_logger
from shared.metrics import AclMetrics, get_metrics

from ..identity.models import (
    Role, Resource, RoleAggregateInterface, ResourceAggregateInterface
)
from .models import Rule
from .results import RuleResultCollection


RuleFactory = Callable[[str], Rule]


class Acl:
    """
    Access control list.

    Holds rules keyed by identity and answers "may ``role`` do ``rule_name``
    on ``resource``" queries. Roles and resources in queries are plain names
    or aggregates that expand to several names.
    """

    def __init__(self, settings: Optional[AclSettings] = None, metrics: Optional[AclMetrics] = None):
        self.settings = settings or get_config()
        self.logger = get_logger("simple_acl.engine", self.settings.log_level)
        self._rules: Dict[str, Rule] = {}
        self._lock = threading.RLock()

        if metrics is None and self.settings.enable_metrics:
            metrics = get_metrics(self.settings.metrics_namespace)
        self.metrics = metrics

        self._rule_class: type = Rule
        self._rule_factory: RuleFactory = Rule
        self.set_rule_class(self.settings.rule_class)

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def rules(self) -> List[Rule]:
        """Snapshot of the registered rules in registration order."""
        with self._lock:
            return list(self._rules.values())

    # Registration

    def add_rule(self, *args: Any) -> Rule:
        """
        Add a rule, or update the already registered rule with the same id.

        Accepted call shapes::

            add_rule(rule)
            add_rule(rule, action)
            add_rule(role, resource, rule)
            add_rule(role, resource, rule, action)

        ``rule`` is a ``Rule`` or a name the configured rule factory turns
        into one. Returns the registered rule instance.
        """
        if len(args) == 1:
            return self._upsert(args[0])
        if len(args) == 2:
            return self.add_rule_with_action(*args)
        if len(args) == 3:
            return self.add_rule_for(*args)
        if len(args) == 4:
            return self.add_rule_for_with_action(*args)

        raise InvalidArgumentError(
            "add_rule accepts only one, two, three or four arguments",
            {"argument_count": len(args)}
        )

    def add_rule_with_action(self, rule: Union[Rule, str], action: Any) -> Rule:
        return self._upsert(rule, action=action, set_action=True)

    def add_rule_for(
        self,
        role: Optional[Role],
        resource: Optional[Resource],
        rule: Union[Rule, str]
    ) -> Rule:
        return self._upsert(rule, role=role, resource=resource, set_binding=True)

    def add_rule_for_with_action(
        self,
        role: Optional[Role],
        resource: Optional[Resource],
        rule: Union[Rule, str],
        action: Any
    ) -> Rule:
        return self._upsert(
            rule, role=role, resource=resource, action=action,
            set_binding=True, set_action=True
        )

    def _upsert(
        self,
        rule: Union[Rule, str],
        role: Optional[Role] = None,
        resource: Optional[Resource] = None,
        action: Any = None,
        set_binding: bool = False,
        set_action: bool = False
    ) -> Rule:
        if role is not None and not isinstance(role, Role):
            raise InvalidArgumentError(
                "Role must be an instance of Role or None",
                {"role_type": type(role).__name__}
            )

        if resource is not None and not isinstance(resource, Resource):
            raise InvalidArgumentError(
                "Resource must be an instance of Resource or None",
                {"resource_type": type(resource).__name__}
            )

        if isinstance(rule, str):
            rule = self._build_rule(rule)

        if not isinstance(rule, Rule):
            raise InvalidArgumentError(
                "Rule must be an instance of Rule or a string",
                {"rule_type": type(rule).__name__}
            )

        with self._lock:
            existing = self._rules.get(rule.rule_id)
            if existing is not None:
                rule = existing
            else:
                self._rules[rule.rule_id] = rule

            if set_binding:
                rule.role = role
                rule.resource = resource

            if set_action:
                rule.action = action

            self._track_rule_count()

        self.logger.info(
            "Rule updated" if existing is not None else "Rule added",
            rule_id=rule.rule_id,
            name=rule.name,
            role=rule.role.name if rule.role else None,
            resource=rule.resource.name if rule.resource else None
        )
        return rule

    # Rule construction

    def get_rule_class(self) -> type:
        return self._rule_class

    def set_rule_class(self, rule_class: Union[str, type]) -> None:
        """
        Set the class used to build rules from bare names.

        ``rule_class`` is a class or a dotted import path to one; it must be
        ``Rule`` or a subclass of it.
        """
        if isinstance(rule_class, str):
            rule_class = self._import_rule_class(rule_class)

        if not isinstance(rule_class, type) or not issubclass(rule_class, Rule):
            self.logger.warning("Rejected rule class", rule_class=repr(rule_class))
            raise AclRuntimeError(
                "Rule class must be Rule or a subclass of Rule",
                {"rule_class": repr(rule_class)}
            )

        self._rule_class = rule_class
        self._rule_factory = rule_class
        self.logger.debug("Rule class set", rule_class=rule_class.__qualname__)

    def set_rule_factory(self, factory: RuleFactory) -> None:
        """Set an arbitrary ``name -> Rule`` factory for rules built from names."""
        if not callable(factory):
            self.logger.warning("Rejected rule factory", factory=repr(factory))
            raise AclRuntimeError("Rule factory must be callable", {"factory": repr(factory)})

        self._rule_factory = factory
        self.logger.info("Rule factory set", factory=repr(factory))

    def _import_rule_class(self, path: str) -> Any:
        module_name, _, attr = path.rpartition(".")
        if not module_name:
            self.logger.warning("Rule class not found", rule_class=path)
            raise AclRuntimeError("Rule class does not exist", {"rule_class": path})

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            self.logger.warning("Rule class not found", rule_class=path, error=str(e))
            raise AclRuntimeError("Rule class does not exist", {"rule_class": path}) from e

        if not hasattr(module, attr):
            self.logger.warning("Rule class not found", rule_class=path)
            raise AclRuntimeError("Rule class does not exist", {"rule_class": path})

        return getattr(module, attr)

    def _build_rule(self, name: str) -> Rule:
        rule = self._rule_factory(name)
        if not isinstance(rule, Rule):
            self.logger.warning("Rule factory produced a non-rule", name=name, product=type(rule).__name__)
            raise AclRuntimeError(
                "Rule factory must produce Rule instances",
                {"name": name, "product_type": type(rule).__name__}
            )
        return rule

    # Lookup

    def has_rule(self, need_rule: Union[Rule, str]) -> Optional[Rule]:
        """Return the registered rule with the same id, or ``None``."""
        rule_id = need_rule.rule_id if isinstance(need_rule, Rule) else need_rule
        with self._lock:
            return self._rules.get(rule_id)

    # Queries

    def is_allowed(self, role: Any, resource: Any, rule_name: Optional[str]) -> bool:
        """Check whether access is allowed."""
        return self.is_allowed_return_result(role, resource, rule_name).get()

    def is_allowed_return_result(self, role: Any, resource: Any, rule_name: Optional[str]) -> RuleResultCollection:
        """Check access and return every decisive result for inspection."""
        start_time = time.time()

        with self._lock:
            collection, path = self._evaluate(role, resource, rule_name)

        allowed = collection.get()
        if self.metrics is not None:
            self.metrics.record_decision(allowed, path, time.time() - start_time)

        self.logger.debug(
            "Access decision",
            role=self._describe(role),
            resource=self._describe(resource),
            rule=rule_name,
            allowed=allowed,
            path=path,
            decisive_results=len(collection)
        )
        return collection

    def _evaluate(self, role: Any, resource: Any, rule_name: Optional[str]) -> Tuple[RuleResultCollection, str]:
        collection = RuleResultCollection()

        if self._evaluate_simple(role, resource, rule_name, collection):
            return collection, "fast"

        roles = self.get_names(role)
        resources = self.get_names(resource)

        for role_name in roles:
            for resource_name in resources:
                for rule in self._rules.values():
                    # Subclassed rules decide name matching themselves.
                    if (
                        isinstance(rule_name, str)
                        and type(rule) is Rule
                        and rule.name != rule_name
                    ):
                        continue

                    rule.reset_aggregate(role, resource)
                    collection.add(rule.is_allowed(rule_name, role_name, resource_name))

        return collection, "general"

    def _evaluate_simple(self, role: Any, resource: Any, rule_name: Any, collection: RuleResultCollection) -> bool:
        """Exact-name shortcut for plain string queries; True when it decided."""
        if not (isinstance(role, str) and isinstance(resource, str) and isinstance(rule_name, str)):
            return False

        for rule in self._rules.values():
            if rule.name != rule_name:
                continue

            if (
                rule.role is None or rule.role.name != role
                or rule.resource is None or rule.resource.name != resource
            ):
                continue

            rule.reset_aggregate(role, resource)
            result = rule.is_allowed(rule_name, role, resource)
            if result.action is None:
                continue

            collection.add(result)
            return True

        return False

    def get_names(self, obj: Any) -> List[Optional[str]]:
        """Expand a query role or resource into the names to match."""
        if obj is None or isinstance(obj, str):
            return [obj]

        if isinstance(obj, RoleAggregateInterface):
            return list(obj.roles_names())

        if isinstance(obj, ResourceAggregateInterface):
            return list(obj.resources_names())

        return []

    def _describe(self, obj: Any) -> Any:
        if obj is None or isinstance(obj, str):
            return obj
        return self.get_names(obj)

    # Removal

    def remove_rule(
        self,
        role_name: Optional[str] = None,
        resource_name: Optional[str] = None,
        rule_name: Optional[str] = None,
        all_matches: bool = True
    ) -> None:
        """
        Remove rules matching every given filter.

        With no filters at all, every rule is removed. A role or resource
        filter only matches rules bound to a role or resource of that name.
        ``all_matches=False`` stops after the first removal.
        """
        if role_name is None and resource_name is None and rule_name is None:
            self.remove_all_rules()
            return

        removed: List[str] = []
        with self._lock:
            for rule_id, rule in list(self._rules.items()):
                if rule_name is not None and rule.name != rule_name:
                    continue

                if role_name is not None and (rule.role is None or rule.role.name != role_name):
                    continue

                if resource_name is not None and (rule.resource is None or rule.resource.name != resource_name):
                    continue

                del self._rules[rule_id]
                removed.append(rule_id)
                if not all_matches:
                    break

            self._track_rule_count()

        if removed:
            self.logger.info(
                "Rules removed",
                rule_ids=removed,
                role=role_name,
                resource=resource_name,
                name=rule_name
            )

    def remove_rule_by_id(self, rule_id: str) -> None:
        """Remove the rule with ``rule_id`` if registered."""
        with self._lock:
            rule = self._rules.pop(rule_id, None)
            self._track_rule_count()

        if rule is not None:
            self.logger.info("Rule removed", rule_id=rule_id, name=rule.name)

    def remove_all_rules(self) -> None:
        """Clear all rules from the list."""
        with self._lock:
            self._rules.clear()
            self._track_rule_count()

        self.logger.info("All rules cleared")

    def _track_rule_count(self) -> None:
        if self.metrics is not None:
            self.metrics.set_rule_count(len(self._rules))
