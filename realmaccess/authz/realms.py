"""
Realm tree flattening and permission grant resolution.

A permission set is a realm node annotated with granted permission
strings. A grant applies to the node's realm and every realm nested
beneath it, so resolving a permission means flattening the tree of each
set that grants it.
"""

import logging
from typing import Optional, Set, Union

from ..core.types import PermissionSet, Session
from .types import PermissionKey


logger = logging.getLogger(__name__)


def flatten_realm_tree(node: Optional[PermissionSet], guard_cycles: bool = True) -> Set[str]:
    """
    Collect the realm ids reachable from a permission set node.

    The walk uses an explicit stack, so deep trees do not hit the
    recursion limit. Realm trees are expected to be acyclic. With
    ``guard_cycles`` enabled each node object is expanded once, so a
    cyclic graph still terminates. A child shared by two parents is
    simply skipped the second time; only a node that is its own
    ancestor is reported as a cycle.

    Args:
        node: Root of the realm tree
        guard_cycles: Track visited nodes to stop on cyclic graphs

    Returns:
        Set[str]: The node's own id plus every descendant id
    """
    realm_ids: Set[str] = set()
    if node is None:
        return realm_ids

    visited = set()
    ancestors = set()
    cycle_reported = False
    # Entries are (node, leaving); a leaving entry pops the node off the current path
    stack = [(node, False)]

    while stack:
        current, leaving = stack.pop()
        if leaving:
            ancestors.discard(id(current))
            continue

        if guard_cycles:
            if id(current) in visited:
                continue
            visited.add(id(current))
            ancestors.add(id(current))
            stack.append((current, True))

        if current.id:
            realm_ids.add(str(current.id))

        children = current.children if isinstance(current.children, (list, tuple)) else []
        for child in children:
            if not isinstance(child, PermissionSet):
                continue
            if guard_cycles and id(child) in ancestors:
                if not cycle_reported:
                    logger.warning(f"Cyclic realm tree detected below realm {node.id}")
                    cycle_reported = True
                continue
            stack.append((child, False))

    return realm_ids


def retrieve_actionable_realms(
    session: Optional[Session],
    permission: Union[str, PermissionKey],
    guard_cycles: bool = True,
) -> Set[str]:
    """
    Find every realm the session may perform a permission in.

    Matching is exact string membership, never prefix or pattern based.

    Args:
        session: The acting user or application
        permission: Permission string or structured key, e.g. ``"create photo"``
        guard_cycles: Passed through to the tree flattener

    Returns:
        Set[str]: Realm ids, empty when nothing is granted
    """
    if session is None:
        return set()

    permission_string = str(permission)
    realms: Set[str] = set()

    for permission_set in session.permission_sets or []:
        if permission_string in (permission_set.permissions or ()):
            realms |= flatten_realm_tree(permission_set, guard_cycles)

    return realms


def collect_permissions(session: Optional[Session]) -> Set[str]:
    """Every permission string the session holds in any realm."""
    if session is None:
        return set()

    permissions: Set[str] = set()
    for permission_set in session.permission_sets or []:
        permissions.update(p for p in (permission_set.permissions or ()) if p)
    return permissions
