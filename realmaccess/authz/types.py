"""
Permission key types for realm based authorization.

Permission sets carry grants as lowercase phrases such as
``"edit any event"`` or ``"include defined image"``. Internally the
engine builds them as structured keys and renders them back to the exact
wire string for set membership tests.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Scope(Enum):
    """Ownership qualifier of a permission."""
    ANY = "any"
    OWN = "own"


# Actions expanded into their "any" and "own" forms
SHORTHAND_ACTIONS = frozenset({"view", "edit"})

# Any of these is enough to know a type exists
KNOW_OF_ACTIONS: Tuple[str, ...] = ("view any", "view own", "edit own", "edit any", "create")

INCLUDE_DEFINED = "include defined"


@dataclass(frozen=True)
class PermissionKey:
    """
    Structured permission: verb, optional scope and the type it targets.

    ``str(key)`` renders the exact string stored in permission sets.
    """
    verb: str
    type_name: str = ""
    scope: Optional[Scope] = None

    def __str__(self) -> str:
        parts = [self.verb, self.scope.value if self.scope else "", self.type_name]
        return " ".join(part for part in parts if part).strip()

    @classmethod
    def parse_action(cls, action: str, type_name: Optional[str] = None) -> 'PermissionKey':
        """
        Build a key from an action phrase and a type.

        Args:
            action: Phrase such as ``"create"``, ``"view any"`` or ``"delete own"``
            type_name: Definition name or basic type

        Returns:
            PermissionKey: The structured key
        """
        words = (action or "").split()
        scope = None
        if words and words[-1] in (Scope.ANY.value, Scope.OWN.value):
            scope = Scope(words.pop())
        return cls(verb=" ".join(words), type_name=type_name or "", scope=scope)

    @classmethod
    def include_defined(cls, parent_type: str) -> 'PermissionKey':
        """Key enabling grants on a basic type to flow down to its definitions."""
        return cls(verb=INCLUDE_DEFINED, type_name=parent_type)

    def with_type(self, type_name: str) -> 'PermissionKey':
        """Same verb and scope against another type."""
        return replace(self, type_name=type_name)

    def with_verb(self, verb: str) -> 'PermissionKey':
        """Same scope and type with another verb."""
        return replace(self, verb=verb)

    @property
    def action(self) -> str:
        """The action phrase without the type, e.g. ``"view any"``."""
        return str(PermissionKey(self.verb, "", self.scope))


@dataclass
class AccessDecision:
    """
    Outcome of an item check, with the rule that settled it.
    """
    allowed: bool
    reason: str
    operation: str = ""
    item_id: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def __bool__(self) -> bool:
        return self.allowed

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'allowed': self.allowed,
            'reason': self.reason,
            'operation': self.operation,
            'item_id': self.item_id,
            'timestamp': self.timestamp.isoformat(),
        }
