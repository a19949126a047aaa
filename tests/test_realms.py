"""
Tests for realm tree flattening and permission grant resolution.
"""

import logging

import pytest

from realmaccess.core.types import AuthenticatedUser, PermissionSet
from realmaccess.authz import (
    PermissionKey,
    Scope,
    flatten_realm_tree,
    retrieve_actionable_realms,
    collect_permissions,
)


@pytest.fixture
def realm_tree():
    """north -> (north-east -> harbour), north-west"""
    return PermissionSet(
        id="north",
        permissions={"view any event", "edit own article"},
        children=[
            PermissionSet(id="north-east", children=[PermissionSet(id="harbour")]),
            PermissionSet(id="north-west"),
        ],
    )


@pytest.fixture
def session(realm_tree):
    return AuthenticatedUser(
        id="user1",
        permission_sets=[
            realm_tree,
            PermissionSet(id="south", permissions={"view any event", "create photo"}),
            PermissionSet(id="west", permissions={"sms"}),
        ],
    )


class TestFlattenRealmTree:
    """Test realm tree flattening."""

    def test_leaf_is_singleton(self):
        """A leaf flattens to its own id only."""
        assert flatten_realm_tree(PermissionSet(id="leaf")) == {"leaf"}

    def test_includes_all_descendants(self, realm_tree):
        """Every nested realm is included."""
        assert flatten_realm_tree(realm_tree) == {"north", "north-east", "harbour", "north-west"}

    def test_idempotent(self, realm_tree):
        """Flattening twice gives the same set and leaves the tree untouched."""
        first = flatten_realm_tree(realm_tree)
        second = flatten_realm_tree(realm_tree)
        assert first == second
        assert len(realm_tree.children) == 2

    def test_none_is_empty(self):
        """No node means no realms."""
        assert flatten_realm_tree(None) == set()

    def test_duplicate_ids_are_merged(self):
        """The same realm reachable twice appears once."""
        tree = PermissionSet(id="a", children=[PermissionSet(id="b"), PermissionSet(id="b")])
        assert flatten_realm_tree(tree) == {"a", "b"}

    def test_deep_tree_does_not_recurse(self):
        """Trees deeper than the recursion limit still flatten."""
        root = PermissionSet(id="r0")
        node = root
        for depth in range(1, 5000):
            child = PermissionSet(id=f"r{depth}")
            node.children.append(child)
            node = child

        realms = flatten_realm_tree(root)
        assert len(realms) == 5000
        assert "r4999" in realms

    def test_cycle_terminates_and_warns(self, caplog):
        """A cyclic graph terminates when guarded."""
        parent = PermissionSet(id="parent")
        child = PermissionSet(id="child", children=[parent])
        parent.children.append(child)

        with caplog.at_level(logging.WARNING, logger="realmaccess.authz.realms"):
            realms = flatten_realm_tree(parent)

        assert realms == {"parent", "child"}
        assert "Cyclic realm tree" in caplog.text

    def test_shared_child_is_not_a_cycle(self, caplog):
        """A realm reachable from two parents is expanded once, without a warning."""
        shared = PermissionSet(id="shared", children=[PermissionSet(id="leaf")])
        tree = PermissionSet(id="root", children=[
            PermissionSet(id="a", children=[shared]),
            PermissionSet(id="b", children=[shared]),
        ])

        with caplog.at_level(logging.WARNING, logger="realmaccess.authz.realms"):
            realms = flatten_realm_tree(tree)

        assert realms == {"root", "a", "b", "shared", "leaf"}
        assert "Cyclic realm tree" not in caplog.text

    def test_malformed_children_are_empty(self):
        """Children that are not a list of nodes contribute nothing."""
        assert flatten_realm_tree(PermissionSet(id="a", children=5)) == {"a"}
        tree = PermissionSet(id="a", children=[None, "b", PermissionSet(id="c")])
        assert flatten_realm_tree(tree) == {"a", "c"}


class TestRetrieveActionableRealms:
    """Test permission grant resolution."""

    def test_no_session(self):
        """No session means no realms."""
        assert retrieve_actionable_realms(None, "view any event") == set()

    def test_unions_all_granting_sets(self, session):
        """Realms from every set granting the permission are combined."""
        realms = retrieve_actionable_realms(session, "view any event")
        assert realms == {"north", "north-east", "harbour", "north-west", "south"}

    def test_single_set(self, session):
        assert retrieve_actionable_realms(session, "create photo") == {"south"}

    def test_exact_match_only(self, session):
        """Prefixes and near matches never count."""
        assert retrieve_actionable_realms(session, "view any") == set()
        assert retrieve_actionable_realms(session, "view any events") == set()
        assert retrieve_actionable_realms(session, "VIEW ANY EVENT") == set()

    def test_accepts_permission_key(self, session):
        """Structured keys render to the same string."""
        key = PermissionKey("edit", "article", Scope.OWN)
        assert retrieve_actionable_realms(session, key) == {"north", "north-east", "harbour", "north-west"}

    def test_ungranted_permission(self, session):
        assert retrieve_actionable_realms(session, "delete any event") == set()

    def test_empty_permission_sets(self):
        """A session without permission sets can act nowhere."""
        assert retrieve_actionable_realms(AuthenticatedUser(id="u"), "view any event") == set()


class TestCollectPermissions:
    """Test permission collection across sets."""

    def test_union_of_sets(self, session):
        assert collect_permissions(session) == {
            "view any event", "edit own article", "create photo", "sms",
        }

    def test_no_session(self):
        assert collect_permissions(None) == set()
