"""
Ownership resolution: is the acting session the author or an owner of an item?
"""

from typing import Optional

from ..core.types import ContentItem, Session
from ..util.ids import get_string_id


def is_author(session: Optional[Session], item: Optional[ContentItem]) -> bool:
    """
    Check whether the session authored or owns a content item.

    A match on any of the following is enough, checked in order:

    - the item's author is the session user
    - the session persona is the item's managed author
    - the session user is listed in the item's owners
    - the session persona is listed in the item's managed owners
    - the item is the session user's own record
    - the item is the session persona's own record

    Blank identifiers never match each other.

    Args:
        session: The acting user or application
        item: The content item

    Returns:
        bool: True if the session counts as an author of the item
    """
    if session is None or item is None:
        return False

    user_id = get_string_id(session.id)
    persona_id = get_string_id(session.persona)
    item_id = get_string_id(item.id)

    if user_id and user_id == get_string_id(item.author):
        return True

    if persona_id and persona_id == get_string_id(item.managed_author):
        return True

    if user_id and user_id in (item.owners or ()):
        return True

    if persona_id and persona_id in (item.managed_owners or ()):
        return True

    # Editing one's own user or persona record
    if item_id and item_id in (user_id, persona_id):
        return True

    return False
