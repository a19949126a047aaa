"""
Type glossary lookups.

The glossary maps definition names to their terms, recording which
basic type each definition extends. It is populated by whatever loads
terminology for the application and handed to the engine read-only.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union


@dataclass(frozen=True)
class TypeTerm:
    """
    A content type or definition known to the application.

    ``parent_type`` is the basic type a definition extends. It is None
    for basic types themselves.
    """
    definition_name: str
    title: str = ""
    plural: str = ""
    parent_type: Optional[str] = None

    @property
    def is_basic(self) -> bool:
        return not self.parent_type

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'definitionName': self.definition_name,
            'title': self.title,
            'plural': self.plural,
            'parentType': self.parent_type,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'TypeTerm':
        """Create from dictionary representation."""
        definition_name = data.get('definitionName') or data.get('definition_name') or ''
        title = data.get('title') or definition_name
        return cls(
            definition_name=definition_name,
            title=title,
            plural=data.get('plural') or title,
            parent_type=data.get('parentType') or data.get('parent_type') or None,
        )


class TypeGlossary(ABC):
    """Read-only lookup of known types and definitions."""

    @abstractmethod
    def get(self, definition_name: str) -> Optional[TypeTerm]:
        """Get a term by definition name."""
        pass

    @abstractmethod
    def terms(self) -> List[TypeTerm]:
        """List all terms."""
        pass

    def sub_types(self, type_name: str) -> List[TypeTerm]:
        """Definitions whose basic type is ``type_name``."""
        return [term for term in self.terms() if term.parent_type == type_name]

    def __iter__(self) -> Iterator[TypeTerm]:
        return iter(self.terms())

    def __contains__(self, definition_name: object) -> bool:
        return isinstance(definition_name, str) and self.get(definition_name) is not None


class MemoryTypeGlossary(TypeGlossary):
    """
    In-memory glossary implementation.
    """

    def __init__(self, terms: Optional[Iterable[Union[TypeTerm, Mapping[str, Any]]]] = None):
        self._terms: Dict[str, TypeTerm] = {}
        for term in terms or []:
            self.add(term)

    def add(self, term: Union[TypeTerm, Mapping[str, Any]]) -> TypeTerm:
        """Add or replace a term."""
        if not isinstance(term, TypeTerm):
            term = TypeTerm.from_dict(term)
        self._terms[term.definition_name] = term
        return term

    def get(self, definition_name: str) -> Optional[TypeTerm]:
        """Get a term by definition name."""
        return self._terms.get(definition_name)

    def terms(self) -> List[TypeTerm]:
        """List all terms."""
        return list(self._terms.values())

    def __len__(self) -> int:
        return len(self._terms)

    @classmethod
    def from_mapping(cls, glossary: Mapping[str, Mapping[str, Any]]) -> 'MemoryTypeGlossary':
        """Build from a ``{definitionName: term}`` mapping."""
        terms = []
        for key, value in glossary.items():
            data = dict(value)
            data.setdefault('definitionName', key)
            terms.append(TypeTerm.from_dict(data))
        return cls(terms)
