"""
Core data types for the realm access engine.

Sessions, permission sets and content items arrive as plain records
from the authentication and content subsystems. These dataclasses give
them a typed shape while keeping the wire keys for ``to_dict`` and
``from_dict``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Union

from ..errors import SessionFormatError, INVALID_ITEM
from ..util.config import as_bool
from ..util.ids import array_ids, as_list, get_string_id


@dataclass
class PermissionSet:
    """
    A realm node annotated with the permissions granted within it.

    Grants made on a node also apply to every realm nested beneath it
    through ``children``. Conversion to and from dictionaries walks the
    tree with an explicit stack, so depth is bounded only by memory.
    """
    id: str
    permissions: Set[str] = field(default_factory=set)
    children: List["PermissionSet"] = field(default_factory=list)
    title: Optional[str] = None

    def _node_dict(self) -> Dict[str, Any]:
        data = {
            '_id': self.id,
            'permissions': sorted(self.permissions),
            'children': [],
        }
        if self.title is not None:
            data['title'] = self.title
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        root = self._node_dict()
        converted = {id(self): root}
        stack = [(self, root)]

        while stack:
            node, data = stack.pop()
            for child in node.children:
                child_data = converted.get(id(child))
                if child_data is None:
                    child_data = child._node_dict()
                    converted[id(child)] = child_data
                    stack.append((child, child_data))
                data['children'].append(child_data)

        return root

    @classmethod
    def _node(cls, data: Mapping[str, Any]) -> 'PermissionSet':
        title = data.get('title')
        return cls(
            id=str(data.get('_id') or data.get('id') or ''),
            permissions={p for p in as_list(data.get('permissions')) if isinstance(p, str)},
            title=title if isinstance(title, str) else None,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PermissionSet':
        """
        Create from dictionary representation.

        Children that are not mappings are skipped, and a ``children``
        value that is not a list counts as no children. A record reached
        twice maps to the same node, so a cyclic record graph becomes a
        cyclic node graph instead of an endless walk.
        """
        if not isinstance(data, Mapping):
            raise SessionFormatError(f"Permission set must be a mapping, got {type(data).__name__}")

        root = cls._node(data)
        built = {id(data): root}
        stack = [(data, root)]

        while stack:
            raw, node = stack.pop()
            for raw_child in as_list(raw.get('children')):
                if not isinstance(raw_child, Mapping):
                    continue
                child = built.get(id(raw_child))
                if child is None:
                    child = cls._node(raw_child)
                    built[id(raw_child)] = child
                    stack.append((raw_child, child))
                node.children.append(child)

        return root


@dataclass
class RealmAssociation:
    """A realm the session can see, with the team that grants it."""
    realm: Optional[str] = None
    team: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {'_realm': self.realm, '_team': self.team}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RealmAssociation':
        """Create from dictionary representation."""
        realm = data.get('_realm', data.get('realm'))
        team = data.get('_team', data.get('team'))
        return cls(realm=get_string_id(realm), team=get_string_id(team))


@dataclass
class Session(ABC):
    """
    Acting session: either an authenticated user or an application.

    Both variants share the contract the engine reads: account type,
    impersonation flag, permission sets, account, persona, contacts and
    visible realms.
    """
    id: Optional[str] = None
    account_type: Optional[str] = None
    pretender: bool = False
    permission_sets: List[PermissionSet] = field(default_factory=list)
    account: Optional[str] = None
    persona: Optional[str] = None
    contacts: List[str] = field(default_factory=list)
    visible_realms: List[RealmAssociation] = field(default_factory=list)

    @property
    @abstractmethod
    def kind(self) -> str:
        """Session variant name."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            '_id': self.id,
            '_type': self.kind,
            'accountType': self.account_type,
            'pretender': self.pretender,
            'permissionSets': [s.to_dict() for s in self.permission_sets],
            'account': self.account,
            'persona': self.persona,
            'contacts': list(self.contacts),
            'visibleRealms': [r.to_dict() for r in self.visible_realms],
        }

    @staticmethod
    def _common_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            'id': get_string_id(data.get('_id') or data.get('id')),
            'account_type': data.get('accountType'),
            'pretender': as_bool(data.get('pretender', False)),
            'permission_sets': [
                PermissionSet.from_dict(s)
                for s in as_list(data.get('permissionSets'))
                if isinstance(s, Mapping)
            ],
            'account': get_string_id(data.get('account')),
            'persona': get_string_id(data.get('persona')),
            'contacts': array_ids(data.get('contacts')),
            'visible_realms': [
                RealmAssociation.from_dict(r)
                for r in as_list(data.get('visibleRealms'))
                if isinstance(r, Mapping)
            ],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Session':
        """
        Create a session from a raw record.

        Application records are recognised by ``_type == 'application'``
        or by a nested ``session`` record, which is unwrapped first.
        Anything else is treated as an authenticated user.
        """
        if not isinstance(data, Mapping):
            raise SessionFormatError(f"Session must be a mapping, got {type(data).__name__}")

        nested = data.get('session')
        if isinstance(nested, Mapping):
            return ApplicationContext(**cls._common_fields(nested))

        if data.get('_type') == 'application':
            return ApplicationContext(**cls._common_fields(data))

        return AuthenticatedUser(**cls._common_fields(data))


@dataclass
class AuthenticatedUser(Session):
    """A logged-in user session."""

    @property
    def kind(self) -> str:
        return "user"


@dataclass
class ApplicationContext(Session):
    """An application acting on its own permission sets."""

    @property
    def kind(self) -> str:
        return "application"


@dataclass
class ContentItem:
    """
    A content record to be authorized.

    ``realms`` is None when the record does not carry the field at all,
    and an empty list when it is present but empty. Only the latter makes
    an item globally accessible.
    """
    id: Optional[str] = None
    type: Optional[str] = None
    definition: Optional[str] = None
    realms: Optional[List[str]] = None
    trail: List[str] = field(default_factory=list)
    author: Optional[str] = None
    managed_author: Optional[str] = None
    owners: List[str] = field(default_factory=list)
    managed_owners: List[str] = field(default_factory=list)
    account: Optional[str] = None
    assigned_to: List[str] = field(default_factory=list)
    assigned_to_team: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN_KEYS = frozenset({
        '_id', 'id', '_type', 'definition', 'realms', 'trail', 'author',
        'managedAuthor', 'owners', 'managedOwners', 'account',
        'assignedTo', 'assignedToTeam',
    })

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = dict(self.extra)
        data.update({
            '_id': self.id,
            '_type': self.type,
            'definition': self.definition,
            'realms': list(self.realms) if self.realms is not None else None,
            'trail': list(self.trail),
            'author': self.author,
            'managedAuthor': self.managed_author,
            'owners': list(self.owners),
            'managedOwners': list(self.managed_owners),
            'account': self.account,
            'assignedTo': list(self.assigned_to),
            'assignedToTeam': list(self.assigned_to_team),
        })
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ContentItem':
        """Create from dictionary representation."""
        if not isinstance(data, Mapping):
            raise SessionFormatError(
                f"Content item must be a mapping, got {type(data).__name__}",
                error_code=INVALID_ITEM,
            )

        realms = data.get('realms')
        return cls(
            id=get_string_id(data.get('_id') or data.get('id')),
            type=data.get('_type') or None,
            definition=data.get('definition') or None,
            realms=array_ids(realms) if isinstance(realms, (list, tuple)) else None,
            trail=array_ids(data.get('trail')),
            author=get_string_id(data.get('author')),
            managed_author=get_string_id(data.get('managedAuthor')),
            owners=array_ids(data.get('owners')),
            managed_owners=array_ids(data.get('managedOwners')),
            account=get_string_id(data.get('account')),
            assigned_to=array_ids(data.get('assignedTo')),
            assigned_to_team=array_ids(data.get('assignedToTeam')),
            extra={k: v for k, v in data.items() if k not in cls._KNOWN_KEYS},
        )

    @classmethod
    def coerce(cls, item: Union['ContentItem', Mapping[str, Any], None]) -> Optional['ContentItem']:
        """Accept either a ContentItem or a raw record."""
        if item is None or isinstance(item, ContentItem):
            return item
        return cls.from_dict(item)


def coerce_session(session: Union[Session, Mapping[str, Any], None]) -> Optional[Session]:
    """Accept either a Session or a raw session record."""
    if session is None or isinstance(session, Session):
        return session
    return Session.from_dict(session)
