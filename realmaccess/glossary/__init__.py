"""
Type glossary and permission catalogue.
"""

from .glossary import TypeTerm, TypeGlossary, MemoryTypeGlossary
from .catalogue import (
    PermissionOption,
    TypePermissions,
    build_permission_catalogue,
)

__all__ = [
    "TypeTerm",
    "TypeGlossary",
    "MemoryTypeGlossary",
    "PermissionOption",
    "TypePermissions",
    "build_permission_catalogue",
]
