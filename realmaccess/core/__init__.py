"""
Core module for realmaccess.
"""

from .config import AccessConfig
from .types import (
    PermissionSet,
    RealmAssociation,
    Session,
    AuthenticatedUser,
    ApplicationContext,
    ContentItem,
    coerce_session,
)

__all__ = [
    "AccessConfig",
    "PermissionSet",
    "RealmAssociation",
    "Session",
    "AuthenticatedUser",
    "ApplicationContext",
    "ContentItem",
    "coerce_session",
]
