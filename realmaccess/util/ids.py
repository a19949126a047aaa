"""
Identifier helpers.

Records reference one another either by a bare identifier or by an
embedded record carrying an ``_id``. These helpers normalise both forms
to plain strings so that comparisons and set operations are exact.
"""

from typing import Any, Iterable, List, Optional


def get_string_id(value: Any) -> Optional[str]:
    """
    Return the string identifier of a record or raw id.

    Args:
        value: A raw identifier, a mapping with ``_id``/``id``, or an
            object exposing an ``id`` attribute

    Returns:
        The identifier as a string, or None when there is nothing to read
    """
    if value is None or value == "":
        return None

    if isinstance(value, dict):
        identifier = value.get("_id") or value.get("id")
        return str(identifier) if identifier else None

    if isinstance(value, (str, int)):
        return str(value)

    identifier = getattr(value, "id", None)
    if identifier:
        return str(identifier)

    return str(value)


def as_list(value: Any) -> List[Any]:
    """A list-valued record field, or an empty list when it is not a sequence."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return []


def array_ids(values: Optional[Iterable[Any]]) -> List[str]:
    """
    Normalise a list of records or ids, dropping blanks and duplicates.

    Anything other than a list, tuple or set yields an empty list.
    """
    result = []
    seen = set()
    for value in as_list(values):
        if not value:
            continue
        identifier = get_string_id(value)
        if identifier and identifier not in seen:
            seen.add(identifier)
            result.append(identifier)
    return result
