"""
Package authz implements realm based authorization decisions.

Grants are permission strings attached to realm trees. A grant applies
in its realm and every nested realm. "own" grants only apply to content
the session authored or owns.
"""

from .types import (
    Scope,
    PermissionKey,
    AccessDecision,
    SHORTHAND_ACTIONS,
    KNOW_OF_ACTIONS,
)

from .realms import (
    flatten_realm_tree,
    retrieve_actionable_realms,
    collect_permissions,
)

from .ownership import is_author
from .evaluator import ActionEvaluator
from .gate import ItemGate, coerce_item
from .service import SessionResolver, AccessService

__all__ = [
    # Types
    'Scope',
    'PermissionKey',
    'AccessDecision',
    'SHORTHAND_ACTIONS',
    'KNOW_OF_ACTIONS',

    # Realms
    'flatten_realm_tree',
    'retrieve_actionable_realms',
    'collect_permissions',

    # Decisions
    'is_author',
    'ActionEvaluator',
    'ItemGate',
    'coerce_item',

    # Service
    'SessionResolver',
    'AccessService',
]
