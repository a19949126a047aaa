"""
Module level authorization functions.

Thin wrappers over a default ActionEvaluator and ItemGate for callers
that already hold the session. Sessions and items may be passed as
typed objects or as raw records.
"""

import logging
from typing import List, Optional

from ..core.types import coerce_session
from ..errors import SessionFormatError
from .evaluator import ActionEvaluator
from .gate import ItemGate, ItemLike, coerce_item
from .ownership import is_author as _is_author
from .service import SessionLike

logger = logging.getLogger(__name__)

_evaluator = ActionEvaluator()
_gate = ItemGate(_evaluator)


def _session(session: SessionLike):
    try:
        return coerce_session(session)
    except SessionFormatError as e:
        logger.warning(f"Malformed session, treating as no session: {e}")
        return None


def can(session: SessionLike, action: str, type_name: str,
        parent_type: Optional[str] = None, web_mode: bool = False) -> bool:
    return _evaluator.can(_session(session), action, type_name, parent_type, web_mode)


def can_know_of(session: SessionLike, type_name: str,
                parent_type: Optional[str] = None, web_mode: bool = False) -> bool:
    return _evaluator.can_know_of(_session(session), type_name, parent_type, web_mode)


def has(session: SessionLike, permission: str, web_mode: bool = False) -> bool:
    return _evaluator.has(_session(session), permission, web_mode)


def is_author(session: SessionLike, item: ItemLike) -> bool:
    return _is_author(_session(session), coerce_item(item))


def can_view_item(session: SessionLike, item: ItemLike, web_mode: bool = False) -> bool:
    """
    Check whether the session may view the item.

    ``web_mode`` is accepted for parity with ``can`` but does not affect
    item checks: the administrator bypass applies regardless.
    """
    return _gate.can_view_item(_session(session), item)


def can_edit_item(session: SessionLike, item: ItemLike, web_mode: bool = False) -> bool:
    return _gate.can_edit_item(_session(session), item)


def can_delete_item(session: SessionLike, item: ItemLike, web_mode: bool = False) -> bool:
    return _gate.can_delete_item(_session(session), item)


def retrieve_actionable_realms(session: SessionLike, permission: str) -> List[str]:
    """Realm ids the session may perform a permission in, sorted."""
    return sorted(_evaluator.actionable_realms(_session(session), permission))
