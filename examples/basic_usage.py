"""
Basic realmaccess usage example.

This example demonstrates the fundamental realmaccess operations:
- Resolving the acting session
- Type level checks
- Item level checks
- Listing the realms a permission applies in
"""

import logging

from realmaccess import AccessConfig, AccessService, SessionResolver
from realmaccess.glossary import MemoryTypeGlossary, build_permission_catalogue


CURRENT_USER = {
    "_id": "user-1",
    "accountType": "managed",
    "account": "church-account",
    "persona": "persona-1",
    "permissionSets": [
        {
            "_id": "north-campus",
            "title": "North Campus",
            "permissions": ["view any event", "edit own event", "include defined event", "create photo"],
            "children": [{"_id": "north-youth", "title": "North Youth"}],
        },
    ],
}

TERMS = [
    {"definitionName": "event", "title": "Event", "plural": "Events"},
    {"definitionName": "service", "title": "Service", "plural": "Services", "parentType": "event"},
    {"definitionName": "photo", "title": "Photo", "plural": "Photos"},
]


def basic_example():
    """Demonstrate basic realmaccess usage"""
    print("Basic realmaccess Example")
    print("=" * 30)

    # 1. Create configuration and session resolver
    config = AccessConfig()
    resolver = SessionResolver(config, user_provider=lambda: CURRENT_USER)
    access = AccessService(config, resolver=resolver, glossary=MemoryTypeGlossary(TERMS))
    print(f"✓ Acting session: {access.retrieve_current_session().id}")

    # 2. Type level checks
    print(f"✓ Can create photos: {access.can('create', 'photo')}")
    print(f"✓ Can edit services: {access.can('edit', 'service', parent_type='event')}")
    print(f"✓ Can delete events: {access.can('delete', 'event')}")

    # 3. Item level checks
    sunday = {
        "_id": "event-1",
        "_type": "event",
        "definition": "service",
        "realms": ["north-youth"],
        "author": "user-1",
        "account": "church-account",
    }
    print(f"✓ Can view Sunday service: {access.can_view_item(sunday)}")
    print(f"✓ Can edit Sunday service: {access.can_edit_item(sunday)}")
    print(f"✓ Edit decision: {access.explain('edit', sunday).reason}")

    # 4. Actionable realms
    realms = access.retrieve_actionable_realms("create photo")
    print(f"✓ Photos can be created in: {', '.join(realms)}")

    # 5. Permission catalogue for an administration screen
    for entry in build_permission_catalogue(TERMS):
        print(f"✓ {entry.title}: {len(entry.permissions)} grantable permissions")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    basic_example()
