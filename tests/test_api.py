"""
Tests for the module level authorization functions.
"""

import realmaccess


SESSION = {
    "_id": "user1",
    "account": "acc1",
    "permissionSets": [
        {"_id": "r1", "permissions": ["view own article", "create photo", "sms"],
         "children": [{"_id": "r2"}]},
    ],
}


class TestModuleFunctions:
    """Test checks against raw session records."""

    def test_can(self):
        assert realmaccess.can(SESSION, "view", "article") is True
        assert realmaccess.can(SESSION, "edit", "article") is False

    def test_can_know_of(self):
        assert realmaccess.can_know_of(SESSION, "article") is True
        assert realmaccess.can_know_of(SESSION, "event") is False

    def test_has(self):
        assert realmaccess.has(SESSION, "sms") is True

    def test_items(self):
        item = {"_id": "a1", "_type": "article", "realms": ["r2"], "author": "user1"}
        assert realmaccess.is_author(SESSION, item) is True
        assert realmaccess.can_view_item(SESSION, item) is True
        assert realmaccess.can_edit_item(SESSION, item) is False
        assert realmaccess.can_delete_item(SESSION, item) is False

    def test_retrieve_actionable_realms(self):
        assert realmaccess.retrieve_actionable_realms(SESSION, "create photo") == ["r1", "r2"]

    def test_malformed_session_denied(self):
        assert realmaccess.can(["user1"], "create", "photo") is False
        assert realmaccess.retrieve_actionable_realms("user1", "create photo") == []

    def test_administrator_item_checks_in_web_mode(self):
        admin = {"_id": "admin1", "accountType": "administrator", "permissionSets": []}
        item = {"_id": "a1", "_type": "article", "realms": ["r1"]}
        assert realmaccess.can_edit_item(admin, item, web_mode=True) is True
        assert realmaccess.can_view_item(admin, item, web_mode=True) is True
        assert realmaccess.can(admin, "edit any", "article", web_mode=True) is False


class TestUnusualRecords:
    """Odd record shapes are denied or ignored, never raised."""

    def test_non_list_children(self):
        session = {"_id": "u", "permissionSets": [
            {"_id": "r1", "permissions": ["edit any article"], "children": 5},
        ]}
        assert realmaccess.can(session, "edit any", "article") is True
        assert realmaccess.retrieve_actionable_realms(session, "edit any article") == ["r1"]

    def test_non_list_permission_sets(self):
        assert realmaccess.can({"_id": "u", "permissionSets": 5}, "edit any", "article") is False

    def test_non_list_owners(self):
        session = {"_id": "u", "permissionSets": [{"_id": "r1", "permissions": ["edit own article"]}]}
        item = {"_id": "a1", "_type": "article", "realms": ["r1"], "owners": 5}
        assert realmaccess.can_edit_item(session, item) is False

    def test_non_list_realms_is_not_open(self):
        item = {"_id": "a1", "_type": "article", "realms": "r1"}
        assert realmaccess.can_edit_item({"_id": "u"}, item) is False

    def test_deep_realm_tree(self):
        root = {"_id": "r0", "permissions": ["edit any article"], "children": []}
        node = root
        for level in range(1, 3000):
            child = {"_id": f"r{level}", "children": []}
            node["children"].append(child)
            node = child

        session = {"_id": "u", "permissionSets": [root]}
        item = {"_id": "a1", "_type": "article", "realms": ["r2999"]}
        assert realmaccess.can_edit_item(session, item) is True

    def test_cyclic_realm_records(self):
        top = {"_id": "top", "permissions": ["view any event"], "children": []}
        below = {"_id": "below", "children": [top]}
        top["children"].append(below)

        session = {"_id": "u", "permissionSets": [top]}
        assert realmaccess.retrieve_actionable_realms(session, "view any event") == ["below", "top"]
