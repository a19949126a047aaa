"""
Tests for the type glossary and permission catalogue.
"""

import pytest

from realmaccess.glossary import (
    MemoryTypeGlossary,
    TypeTerm,
    build_permission_catalogue,
)


@pytest.fixture
def terms():
    return [
        {"definitionName": "image", "title": "Image", "plural": "Images"},
        {"definitionName": "photo", "title": "Photo", "plural": "Photos", "parentType": "image"},
        {"definitionName": "scan", "title": "Scan", "plural": "Scans", "parentType": "image"},
        {"definitionName": "contact", "title": "Contact", "plural": "Contacts"},
        {"definitionName": "account", "title": "Account", "plural": "Accounts"},
        {"definitionName": "smscorrespondence", "title": "SMS", "plural": "SMS Messages"},
        {"definitionName": "team", "title": "Team", "plural": "Teams"},
        {"definitionName": "persona", "title": "Persona", "plural": "Personas"},
    ]


@pytest.fixture
def catalogue(terms):
    return {entry.term.definition_name: entry for entry in build_permission_catalogue(terms)}


class TestGlossary:
    """Test glossary lookups."""

    def test_sub_types(self, terms):
        glossary = MemoryTypeGlossary(terms)
        assert sorted(t.definition_name for t in glossary.sub_types("image")) == ["photo", "scan"]
        assert glossary.sub_types("contact") == []

    def test_lookup(self, terms):
        glossary = MemoryTypeGlossary(terms)
        assert glossary.get("photo").parent_type == "image"
        assert "photo" in glossary
        assert "video" not in glossary
        assert len(glossary) == len(terms)

    def test_from_mapping(self):
        glossary = MemoryTypeGlossary.from_mapping({"photo": {"title": "Photo", "parentType": "image"}})
        term = glossary.get("photo")
        assert term.definition_name == "photo"
        assert term.plural == "Photo"
        assert term.is_basic is False


class TestPermissionCatalogue:
    """Test grantable permission listings."""

    def test_ordered_by_title(self, terms):
        titles = [entry.title for entry in build_permission_catalogue(terms)]
        assert titles == sorted(titles)

    def test_standard_permissions(self, catalogue):
        values = catalogue["photo"].values
        assert values[0] == "create photo"
        for verb in ("view", "edit", "delete", "destroy", "restore"):
            assert f"{verb} any photo" in values
            assert f"{verb} own photo" in values

    def test_include_defined_only_on_basic_types(self, catalogue):
        assert "include defined image" in catalogue["image"].values
        assert not any(v.startswith("include defined") for v in catalogue["photo"].values)

    def test_include_defined_names_sub_types(self, catalogue):
        option = next(o for o in catalogue["image"].permissions if o.value == "include defined image")
        assert "Photos" in option.description
        assert "Scans" in option.description

    def test_account(self, catalogue):
        assert catalogue["account"].values == ["administrate account"]

    def test_correspondence(self, catalogue):
        assert catalogue["smscorrespondence"].values == [
            "create smscorrespondence",
            "view any smscorrespondence",
            "view own smscorrespondence",
        ]

    def test_contact_extras(self, catalogue):
        assert "sms" in catalogue["contact"].values
        assert "email" in catalogue["contact"].values

    def test_team_and_persona_extras(self, catalogue):
        assert "join team" in catalogue["team"].values
        assert "leave team" in catalogue["team"].values
        assert "impersonate" in catalogue["persona"].values
        assert "assign role" in catalogue["persona"].values

    def test_to_dict(self, catalogue):
        data = catalogue["photo"].to_dict()
        assert data["definitionName"] == "photo"
        assert data["parentType"] == "image"
        assert data["permissions"][0] == {
            "title": "Create new Photos",
            "value": "create photo",
            "description": "Can create new Photos",
        }

    def test_accepts_terms(self):
        catalogue = build_permission_catalogue([TypeTerm("ticket", "Ticket", "Tickets")])
        assert "collect ticket" in catalogue[0].values
