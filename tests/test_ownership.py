"""
Tests for ownership resolution.
"""

import pytest

from realmaccess.core.types import AuthenticatedUser, ContentItem
from realmaccess.authz import is_author


@pytest.fixture
def user():
    return AuthenticatedUser(id="user1", persona="persona1")


class TestIsAuthor:
    """Test author and owner matching."""

    def test_direct_author(self, user):
        assert is_author(user, ContentItem(id="a1", author="user1")) is True

    def test_embedded_author_record(self, user):
        item = ContentItem.from_dict({"_id": "a1", "author": {"_id": "user1", "name": "Sam"}})
        assert is_author(user, item) is True

    def test_managed_author(self, user):
        assert is_author(user, ContentItem(id="a1", managed_author="persona1")) is True

    def test_owner(self, user):
        assert is_author(user, ContentItem(id="a1", owners=["someone", "user1"])) is True

    def test_managed_owner(self, user):
        assert is_author(user, ContentItem(id="a1", managed_owners=["persona1"])) is True

    def test_own_user_record(self, user):
        assert is_author(user, ContentItem(id="user1", type="user")) is True

    def test_own_persona_record(self, user):
        assert is_author(user, ContentItem(id="persona1", type="persona")) is True

    def test_someone_else(self, user):
        item = ContentItem(id="a1", author="user2", owners=["user3"], managed_owners=["persona9"])
        assert is_author(user, item) is False

    def test_missing_persona_never_matches_missing_managed_author(self):
        """Blank identifiers are not a match."""
        user = AuthenticatedUser(id="user1")
        assert is_author(user, ContentItem(id="a1", author="user2")) is False

    def test_no_session(self):
        assert is_author(None, ContentItem(id="a1", author="user1")) is False

    def test_no_item(self, user):
        assert is_author(user, None) is False
