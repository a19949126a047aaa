"""
Item authorization: may a session view, edit or delete a specific content item?

The three checks share one algorithm and differ only in the verb and in
two rules:

- viewing is not restricted by the item's account
- deleting ignores process task assignment
"""

import logging
from typing import Any, Mapping, Optional, Set, Union

from ..core.types import ContentItem, Session
from ..errors import SessionFormatError
from ..util.ids import array_ids, get_string_id
from .evaluator import ActionEvaluator
from .ownership import is_author
from .types import AccessDecision, PermissionKey, Scope


logger = logging.getLogger(__name__)

VIEW = "view"
EDIT = "edit"
DELETE = "delete"

ItemLike = Union[ContentItem, Mapping[str, Any], None]


def coerce_item(item: ItemLike) -> Optional[ContentItem]:
    """Normalise an item, treating a malformed record as no item."""
    try:
        return ContentItem.coerce(item)
    except SessionFormatError as e:
        logger.warning(f"Malformed content item: {e}")
        return None


def _deny(reason: str, operation: str, item: Optional[ContentItem] = None) -> AccessDecision:
    return AccessDecision(False, reason, operation, item.id if item else None)


def _allow(reason: str, operation: str, item: ContentItem) -> AccessDecision:
    return AccessDecision(True, reason, operation, item.id)


class ItemGate:
    """
    Per-item view, edit and delete checks.
    """

    def __init__(self, evaluator: Optional[ActionEvaluator] = None):
        self.evaluator = evaluator or ActionEvaluator()

    @property
    def config(self):
        return self.evaluator.config

    def content_realms(self, item: ContentItem, definition_name: str,
                       parent_type: Optional[str]) -> Set[str]:
        """
        The realms an item sits in.

        A realm is located by its ancestor trail plus itself. Any other
        item uses its ``realms`` list.
        """
        realm_type = self.config.realm_type
        if realm_type in (definition_name, parent_type):
            realms = set(array_ids(item.trail))
            item_id = get_string_id(item.id)
            if item_id:
                realms.add(item_id)
            return realms
        return set(array_ids(item.realms))

    def is_assigned(self, session: Session, item: ContentItem) -> bool:
        """True when a process item is assigned to the session's contacts or teams."""
        if item.type != self.config.process_type:
            return False

        assigned_to = set(array_ids(item.assigned_to))
        if assigned_to & set(array_ids(session.contacts)):
            return True

        assigned_teams = set(array_ids(item.assigned_to_team))
        if assigned_teams:
            session_teams = {r.team for r in session.visible_realms if r.team}
            if assigned_teams & session_teams:
                return True

        return False

    def evaluate(self, session: Optional[Session], item: ItemLike, verb: str,
                 administrator: Optional[bool] = None) -> AccessDecision:
        """
        Decide whether the session may apply ``verb`` to the item.

        Args:
            session: The acting user or application
            item: The content item, as a ContentItem or raw record
            verb: One of ``"view"``, ``"edit"`` or ``"delete"``
            administrator: Whether the administrator bypass applies. When
                None it is decided from ``session`` itself. Web mode does
                not suppress the bypass for item checks.

        Returns:
            AccessDecision: The outcome and the rule that settled it
        """
        operation = f"{verb} item"
        item = coerce_item(item)
        if item is None:
            return _deny("no item", operation)
        if session is None:
            return _deny("no session", operation, item)

        # Account isolation comes before the administrator bypass
        if verb != VIEW:
            item_account = get_string_id(item.account)
            if item_account and item_account != get_string_id(session.account):
                return _deny("item belongs to another account", operation, item)

        if administrator is None:
            administrator = self.evaluator.is_administrator(session)
        if administrator:
            return _allow("administrator", operation, item)

        # Items with an explicitly empty realm list are unrestricted
        if item.type and item.type != self.config.realm_type:
            if item.realms is not None and not item.realms:
                return _allow("item has no realms", operation, item)

        definition_name = item.definition or item.type or ""
        parent_type = item.type if item.definition else None

        if verb != DELETE and self.is_assigned(session, item):
            return _allow("assigned process", operation, item)

        any_key = PermissionKey(verb, definition_name, Scope.ANY)
        own_key = PermissionKey(verb, definition_name, Scope.OWN)
        any_realms = self.evaluator.realms_for_key(session, any_key)
        own_realms = self.evaluator.realms_for_key(session, own_key)

        if parent_type and self.evaluator.granted_anywhere(
                session, PermissionKey.include_defined(parent_type)):
            any_realms |= self.evaluator.realms_for_key(session, any_key.with_type(parent_type))
            own_realms |= self.evaluator.realms_for_key(session, own_key.with_type(parent_type))

        content_realms = self.content_realms(item, definition_name, parent_type)

        if any_realms & content_realms:
            return _allow(f"{any_key.action} granted in item realm", operation, item)

        if own_realms & content_realms and is_author(session, item):
            return _allow(f"{own_key.action} granted to author in item realm", operation, item)

        return _deny("no matching realm grant", operation, item)

    def can_view_item(self, session: Optional[Session], item: ItemLike,
                      administrator: Optional[bool] = None) -> bool:
        """Check whether the session may view the item."""
        return self.evaluate(session, item, VIEW, administrator).allowed

    def can_edit_item(self, session: Optional[Session], item: ItemLike,
                      administrator: Optional[bool] = None) -> bool:
        """Check whether the session may edit the item."""
        return self.evaluate(session, item, EDIT, administrator).allowed

    def can_delete_item(self, session: Optional[Session], item: ItemLike,
                        administrator: Optional[bool] = None) -> bool:
        """Check whether the session may delete the item."""
        return self.evaluate(session, item, DELETE, administrator).allowed
