"""
Unit tests for roles, resources and aggregates.
"""

import pytest

from shared.test_helpers import AclDataFactory
from simple_acl.identity.models import (
    Role, Resource, RoleAggregate, ResourceAggregate,
    RoleAggregateInterface, ResourceAggregateInterface
)


class TestIdentity:
    """Test cases for the role/resource hierarchy."""

    @pytest.fixture
    def roles(self):
        return AclDataFactory.create_role_tree()

    def test_find_depth(self, roles):
        guest = roles["guest"]

        assert guest.find_depth("guest") == 0
        assert guest.find_depth("user") == 1
        assert guest.find_depth("admin") == 3
        assert guest.find_depth("nobody") is None
        assert guest.find_depth(None) is None

    def test_find_depth_shallowest_match(self):
        root, middle = Role("root"), Role("middle")
        root.add_child(middle)
        middle.add_child(Role("leaf"))
        root.add_child(Role("leaf"))

        assert root.find_depth("leaf") == 1

    def test_find_depth_with_cycle(self):
        first, second = Role("first"), Role("second")
        first.add_child(second)
        second.add_child(first)

        assert first.find_depth("second") == 1
        assert first.find_depth("third") is None

    def test_children(self, roles):
        guest = roles["guest"]

        assert guest.has_child("user")
        assert guest.has_child(roles["user"])
        assert guest.get_children() == [roles["user"]]

        guest.remove_child("user")

        assert not guest.has_child("user")
        assert guest.find_depth("admin") is None

    def test_identities_compare_by_identity(self):
        assert Role("editor") != Role("editor")
        assert Role("editor").get_children() == []

    def test_repr(self):
        assert repr(Resource("doc")) == "Resource(name='doc')"


class TestAggregates:
    """Test cases for RoleAggregate and ResourceAggregate."""

    def test_role_aggregate(self):
        admin, editor = Role("admin"), Role("editor")
        aggregate = RoleAggregate([admin])

        aggregate.add_role(editor)
        aggregate.add_role(Role("admin"))

        assert isinstance(aggregate, RoleAggregateInterface)
        assert aggregate.roles_names() == ["admin", "editor"]
        assert aggregate.get_role("admin") is admin
        assert aggregate.get_roles() == [admin, editor]

        aggregate.remove_role("admin")
        assert aggregate.roles_names() == ["editor"]

        aggregate.remove_role(editor)
        assert len(aggregate) == 0

    def test_role_aggregate_set_and_clear(self):
        aggregate = RoleAggregate([Role("a")])

        aggregate.set_roles([Role("b"), Role("c")])
        assert aggregate.roles_names() == ["b", "c"]

        aggregate.remove_roles()
        assert aggregate.roles_names() == []
        assert aggregate.get_role("b") is None

    def test_resource_aggregate(self):
        resources = AclDataFactory.create_resources()
        aggregate = ResourceAggregate()

        aggregate.set_resources(list(resources.values()))
        aggregate.remove_resource("blog")

        assert isinstance(aggregate, ResourceAggregateInterface)
        assert not isinstance(aggregate, RoleAggregateInterface)
        assert aggregate.resources_names() == ["page", "doc"]
        assert aggregate.get_resource("doc") is resources["doc"]

        aggregate.add_resource(Resource("blog"))
        assert aggregate.resources_names() == ["page", "doc", "blog"]
        assert len(aggregate.get_resources()) == 3

        aggregate.remove_resources()
        assert len(aggregate) == 0

    def test_custom_aggregate(self):
        """Test any object implementing the capability is accepted."""

        class User(RoleAggregateInterface):
            def __init__(self, roles):
                self.roles = roles

            def roles_names(self):
                return list(self.roles)

        assert User(["a", "b"]).roles_names() == ["a", "b"]
