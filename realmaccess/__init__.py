"""
realmaccess Python Package

Realm based authorization for content: decides whether a user or
application session may view, edit, delete or create content, based on
permission strings granted across a tree of realms.
"""

__version__ = "0.1.0"

from .core.config import AccessConfig
from .core.types import (
    PermissionSet,
    Session,
    AuthenticatedUser,
    ApplicationContext,
    ContentItem,
)
from .authz.service import AccessService, SessionResolver
from .authz.api import (
    can,
    can_know_of,
    has,
    is_author,
    can_view_item,
    can_edit_item,
    can_delete_item,
    retrieve_actionable_realms,
)

__all__ = [
    "AccessConfig",
    "PermissionSet",
    "Session",
    "AuthenticatedUser",
    "ApplicationContext",
    "ContentItem",
    "AccessService",
    "SessionResolver",
    "can",
    "can_know_of",
    "has",
    "is_author",
    "can_view_item",
    "can_edit_item",
    "can_delete_item",
    "retrieve_actionable_realms",
]
