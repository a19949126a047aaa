"""
Action evaluation: may a session perform an action on a type of content?
"""

import logging
from typing import Iterable, Optional, Set

from ..core.config import AccessConfig
from ..core.types import Session
from ..glossary.glossary import TypeGlossary
from .realms import collect_permissions, retrieve_actionable_realms
from .types import (
    KNOW_OF_ACTIONS,
    SHORTHAND_ACTIONS,
    PermissionKey,
)


logger = logging.getLogger(__name__)


class ActionEvaluator:
    """
    Type-level permission checks for a session.

    Grants on a basic type reach its definitions only when the grantor
    also granted ``include defined <basic type>`` somewhere.
    """

    def __init__(self, config: Optional[AccessConfig] = None,
                 glossary: Optional[TypeGlossary] = None):
        self.config = config or AccessConfig()
        self.glossary = glossary

    def is_administrator(self, session: Optional[Session], web_mode: bool = False) -> bool:
        """True for a non-impersonating administrator, outside web mode."""
        if session is None or web_mode:
            return False
        if session.account_type != self.config.administrator_account_type:
            return False
        return not session.pretender

    def actionable_realms(self, session: Optional[Session], permission) -> Set[str]:
        """Realms the session may perform ``permission`` in."""
        return retrieve_actionable_realms(session, permission, self.config.guard_cyclic_trees)

    def granted_anywhere(self, session: Optional[Session], permission) -> bool:
        return bool(self.actionable_realms(session, permission))

    def realms_for_key(self, session: Optional[Session], key: PermissionKey) -> Set[str]:
        """
        Realms granted for a key, treating edit grants as view grants.

        ``view any`` also collects ``edit any`` realms, and ``view own``
        also collects ``edit own`` realms.
        """
        realms = self.actionable_realms(session, key)
        if key.verb == "view" and key.scope is not None:
            realms |= self.actionable_realms(session, key.with_verb("edit"))
        return realms

    def can(self, session: Optional[Session], action: str, type_name: str,
            parent_type: Optional[str] = None, web_mode: bool = False) -> bool:
        """
        Check whether the session may perform an action on a type.

        Args:
            session: The acting user or application
            action: ``"create"``, ``"view any"``, ``"edit own"``, or the
                shorthands ``"view"`` and ``"edit"``
            type_name: Definition name or basic type, e.g. ``"photo"``
            parent_type: Basic type of ``type_name``, e.g. ``"image"``
            web_mode: Check from the web perspective, without admin bypass

        Returns:
            bool: True if the action is granted in at least one realm
        """
        if session is None:
            logger.debug(f"No session, denying {action} {type_name}")
            return False

        if self.is_administrator(session, web_mode):
            return True

        action = (action or "").strip()
        if action in SHORTHAND_ACTIONS:
            return (
                self.can(session, f"{action} any", type_name, parent_type, web_mode) or
                self.can(session, f"{action} own", type_name, parent_type, web_mode)
            )

        key = PermissionKey.parse_action(action, type_name)
        if self.realms_for_key(session, key):
            return True

        if not parent_type:
            return False

        # Grants on the parent only count when flow-down is enabled
        if not self.granted_anywhere(session, PermissionKey.include_defined(parent_type)):
            return False

        return bool(self.realms_for_key(session, key.with_type(parent_type)))

    def _can_any(self, session: Session, actions: Iterable[str], type_name: str,
                 parent_type: Optional[str], web_mode: bool) -> bool:
        return any(self.can(session, action, type_name, parent_type, web_mode) for action in actions)

    def can_know_of(self, session: Optional[Session], type_name: str,
                    parent_type: Optional[str] = None, web_mode: bool = False) -> bool:
        """
        Check whether the session may know that a type exists at all.

        Any view, edit or create grant on the type is enough. When a
        glossary is available, the same grant on any of the type's
        definitions also counts.
        """
        if session is None:
            return False

        if self.is_administrator(session, web_mode):
            return True

        if self._can_any(session, KNOW_OF_ACTIONS, type_name, parent_type, web_mode):
            return True

        if self.glossary is None:
            return False

        return any(
            self._can_any(session, KNOW_OF_ACTIONS, term.definition_name, None, web_mode)
            for term in self.glossary.sub_types(type_name)
        )

    def has(self, session: Optional[Session], permission: str, web_mode: bool = False) -> bool:
        """
        Check whether the session holds a permission in any realm.

        Useful for capabilities such as ``"sms"`` or ``"impersonate"``
        that are not scoped to content.
        """
        if session is None:
            return False

        if self.is_administrator(session, web_mode):
            return True

        return str(permission) in collect_permissions(session)

