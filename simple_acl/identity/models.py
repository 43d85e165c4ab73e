"""
Role and resource identities consumed by the ACL engine.

A ``Role`` or ``Resource`` is a named node that may have children. A rule
bound to a node also applies to its descendants. Aggregates group several
roles or resources so that one query object can stand for all of them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Union


@dataclass(eq=False)
class Identity:
    """Named node in a role or resource hierarchy."""

    name: str
    _children: Dict[str, "Identity"] = field(default_factory=dict, init=False, repr=False)

    def add_child(self, child: "Identity") -> None:
        """Add a child node, replacing any child with the same name."""
        self._children[child.name] = child

    def remove_child(self, child: Union["Identity", str]) -> None:
        name = child if isinstance(child, str) else child.name
        self._children.pop(name, None)

    def has_child(self, child: Union["Identity", str]) -> bool:
        name = child if isinstance(child, str) else child.name
        return name in self._children

    def get_children(self) -> List["Identity"]:
        return list(self._children.values())

    def find_depth(self, name: Optional[str]) -> Optional[int]:
        """
        Return how far below this node ``name`` is found.

        0 means this node itself, 1 a direct child and so on. ``None`` means
        the name is not part of this subtree. Breadth-first, so the shallowest
        match wins when a name appears more than once.
        """
        if name is None:
            return None

        level: List[Identity] = [self]
        visited: Set[int] = set()
        depth = 0

        while level:
            next_level: List[Identity] = []
            for node in level:
                if id(node) in visited:
                    continue
                visited.add(id(node))

                if node.name == name:
                    return depth
                next_level.extend(node._children.values())

            level = next_level
            depth += 1

        return None


class Role(Identity):
    """A subject that rules can be bound to."""


class Resource(Identity):
    """An object that rules can be bound to."""


class RoleAggregateInterface(ABC):
    """Capability of standing in for a group of roles."""

    @abstractmethod
    def roles_names(self) -> List[str]:
        """Return role names in evaluation order."""


class ResourceAggregateInterface(ABC):
    """Capability of standing in for a group of resources."""

    @abstractmethod
    def resources_names(self) -> List[str]:
        """Return resource names in evaluation order."""


class BaseAggregate:
    """Ordered, name-unique container of identities."""

    def __init__(self, objects: Optional[List[Identity]] = None):
        self._objects: Dict[str, Identity] = {}
        for obj in objects or []:
            self._add_object(obj)

    def __len__(self) -> int:
        return len(self._objects)

    def _add_object(self, obj: Identity) -> None:
        if obj.name not in self._objects:
            self._objects[obj.name] = obj

    def _remove_object(self, obj: Union[Identity, str]) -> None:
        name = obj if isinstance(obj, str) else obj.name
        self._objects.pop(name, None)

    def _remove_objects(self) -> None:
        self._objects.clear()

    def _get_object(self, name: str) -> Optional[Identity]:
        return self._objects.get(name)

    def _get_objects(self) -> List[Identity]:
        return list(self._objects.values())

    def _set_objects(self, objects: List[Identity]) -> None:
        self._remove_objects()
        for obj in objects:
            self._add_object(obj)

    def _names(self) -> List[str]:
        return list(self._objects.keys())


class RoleAggregate(BaseAggregate, RoleAggregateInterface):
    """Group of roles, e.g. all roles held by one user."""

    def add_role(self, role: Role) -> None:
        self._add_object(role)

    def remove_role(self, role: Union[Role, str]) -> None:
        self._remove_object(role)

    def remove_roles(self) -> None:
        self._remove_objects()

    def get_role(self, name: str) -> Optional[Role]:
        return self._get_object(name)

    def get_roles(self) -> List[Role]:
        return self._get_objects()

    def set_roles(self, roles: List[Role]) -> None:
        self._set_objects(roles)

    def roles_names(self) -> List[str]:
        return self._names()


class ResourceAggregate(BaseAggregate, ResourceAggregateInterface):
    """Group of resources, e.g. a document and the folder holding it."""

    def add_resource(self, resource: Resource) -> None:
        self._add_object(resource)

    def remove_resource(self, resource: Union[Resource, str]) -> None:
        self._remove_object(resource)

    def remove_resources(self) -> None:
        self._remove_objects()

    def get_resource(self, name: str) -> Optional[Resource]:
        return self._get_object(name)

    def get_resources(self) -> List[Resource]:
        return self._get_objects()

    def set_resources(self, resources: List[Resource]) -> None:
        self._set_objects(resources)

    def resources_names(self) -> List[str]:
        return self._names()
