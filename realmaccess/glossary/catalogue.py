"""
Permission catalogue: the grantable permissions for every known type.

Administration screens use the catalogue to list the checkboxes a
grantor can tick for each type. Every ``value`` is the exact permission
string the engine matches against permission sets.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Union

from .glossary import TypeTerm


# Basic types that only support sending and reading, never editing
CORRESPONDENCE_TYPES = frozenset({"simpleemail", "smscorrespondence"})

OWNED_VERBS = (
    # verb, title verb, "any" description, "own" description
    ("view", "View", "Can view {plural} regardless of who the creator is",
     "Can view {plural} that were originally created by the user, or the user is listed as an 'owner'"),
    ("edit", "Edit", "Can edit {title} regardless of who the creator is",
     "Can edit {plural} that were originally created by the user, or the user is listed as an 'owner'"),
    ("delete", "Delete", "Can delete {plural} regardless of who the creator is",
     "Can delete {plural} that were originally created by the user, or the user is listed as an 'owner'"),
    ("destroy", "Destroy", "Can destroy {plural} permanently from the trash regardless of who the creator is",
     "Can destroy {plural} permanently from the trash that were originally created by the user, "
     "or the user is listed as an 'owner'"),
    ("restore", "Restore", "Can restore {plural} from the trash regardless of who the creator is",
     "Can restore {plural} from the trash that were originally created by the user, "
     "or the user is listed as an 'owner'"),
)


@dataclass(frozen=True)
class PermissionOption:
    """A single grantable permission."""
    title: str
    value: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {'title': self.title, 'value': self.value, 'description': self.description}


@dataclass
class TypePermissions:
    """The grantable permissions for one type."""
    term: TypeTerm
    permissions: List[PermissionOption] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.term.title

    @property
    def values(self) -> List[str]:
        return [option.value for option in self.permissions]

    def add(self, title: str, value: str, description: str = "") -> None:
        self.permissions.append(PermissionOption(title, value, description))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.term.to_dict()
        data['permissions'] = [option.to_dict() for option in self.permissions]
        return data


def _standard_permissions(entry: TypePermissions, name: str, term: TypeTerm) -> None:
    entry.add(f"Create new {term.plural}", f"create {name}", f"Can create new {term.plural}")
    for verb, title_verb, any_description, own_description in OWNED_VERBS:
        entry.add(
            f"{title_verb} any {term.plural}",
            f"{verb} any {name}",
            any_description.format(plural=term.plural, title=term.title),
        )
        entry.add(
            f"{title_verb} owned {term.plural}",
            f"{verb} own {name}",
            own_description.format(plural=term.plural, title=term.title),
        )


def _correspondence_permissions(entry: TypePermissions, name: str, term: TypeTerm) -> None:
    entry.add(f"Create new {term.plural}", f"create {name}", f"Can create new {term.plural}")
    entry.add(
        f"View any {term.plural}",
        f"view any {name}",
        f"Can view {term.plural} regardless of who the sender is",
    )
    entry.add(
        f"View owned {term.plural}",
        f"view own {name}",
        f"Can view {term.plural} that were originally sent by the user",
    )


def _extra_permissions(entry: TypePermissions, name: str, term: TypeTerm) -> None:
    plural = term.plural
    if name in ("interaction", "post"):
        entry.add(f"Submit new {plural}", f"submit {name}",
                  f"Can submit new {plural} through the use of a form.")
    elif name == "transaction":
        entry.add(f"Refund {plural}", f"refund {name}", f"Can process {plural} refunds")
    elif name == "contact":
        entry.add("Send SMS Text Message", "sms",
                  f"Can send SMS Messages to {plural} that the user is allowed to view")
        entry.add("Send Basic Emails", "email",
                  "Can send email messages to contacts that the user is allowed to view")
    elif name == "checkin":
        entry.add(f"Leader Override Checkout {plural}", f"leader checkout {name}",
                  "Can manually override and checkout a contact without providing the PIN Number")
    elif name == "ticket":
        entry.add(f"Scan / Collect {plural}", f"collect {name}",
                  "Can scan a ticket and mark it as 'collected'")
    elif name == "policy":
        entry.add(f"Grant {plural}", f"grant {name}", f"Can allocate any {plural} to other users")
        entry.add(f"Grant held {plural}", f"grant held {name}",
                  f"Can allocate {plural} that are held by the current user to other users")
        entry.add(f"Revoke {plural}", f"revoke {name}", f"Can revoke {plural} from other users")
    elif name == "role":
        entry.add(f"Assign individual {plural}", "assign role",
                  "Can assign individual permission sets to other users")
    elif name == "persona":
        entry.add("Assign individual roles", "assign role",
                  "Can assign individual permission sets to other users")
        entry.add(f"Impersonate {plural}", "impersonate", "Can impersonate other user personas")
    elif name == "team":
        entry.add(f"Join {plural}", f"join {name}",
                  f"Can join or add members to {plural} if those {plural} allow provisional membership")
        entry.add(f"Leave {plural}", f"leave {name}",
                  f"Can leave or remove members from {plural} if those {plural} allow provisional membership")


def build_permission_catalogue(
    terms: Iterable[Union[TypeTerm, Mapping[str, Any]]]
) -> List[TypePermissions]:
    """
    Build the grantable permissions for every term.

    Basic types also get an ``include defined <type>`` option, which lets
    grants on the basic type flow down to all of its definitions.

    Args:
        terms: Glossary terms, as TypeTerm instances or raw records

    Returns:
        List[TypePermissions]: One entry per term, ordered by title
    """
    terms = [t if isinstance(t, TypeTerm) else TypeTerm.from_dict(t) for t in terms]

    derivatives: Dict[str, List[str]] = {}
    for term in terms:
        if term.parent_type:
            derivatives.setdefault(term.parent_type, []).append(term.plural)

    catalogue = []
    for term in terms:
        name = term.definition_name
        basic_type = term.parent_type or name
        entry = TypePermissions(term=term)
        catalogue.append(entry)

        if name == "account":
            entry.add("Administrate Account Information", "administrate account",
                      "Update billing, view invoices, add credit and modify Account Information")
            continue

        definable = term.is_basic
        if basic_type in CORRESPONDENCE_TYPES:
            definable = False
            _correspondence_permissions(entry, name, term)
        else:
            _standard_permissions(entry, name, term)

        _extra_permissions(entry, name, term)

        if definable:
            description = f"Apply all the selected permissions to all {term.title} definitions"
            names = derivatives.get(basic_type)
            if names:
                description = f"{description}, Eg. ({', '.join(names)})"
            entry.add(f"Include all defined {term.title} types", f"include defined {name}", description)

    catalogue.sort(key=lambda entry: entry.title)
    return catalogue
