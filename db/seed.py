"""
db/seed.py
----------
Loads the demo fixtures (db/json/users.json, db/json/properties.json)
into the store through the regular service operations.

Fixture files map a string id to a record, e.g. ``{"1": {"name": ...}}``.
Owner ids in properties.json refer to those fixture ids and are remapped
to the ids the database assigns.

    python -m db.seed
"""

import json
from pathlib import Path
from typing import Optional

from utils.logger import get_logger

logger = get_logger(__name__)

FIXTURE_DIR = Path(__file__).parent / "json"


def load_fixture(name: str, directory: Path = FIXTURE_DIR) -> dict:
    """Read one fixture file; returns {} when it does not exist."""
    path = directory / f"{name}.json"
    if not path.exists():
        logger.warning(f"Fixture file not found: {path}")
        return {}
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def seed_fixtures(service, directory: Optional[Path] = None) -> dict:
    """
    Insert fixture users and properties.

    Users whose email is already registered are reused rather than inserted again.

    Args:
        service: A QueryService bound to an open Database.
        directory: Where the fixture files live (default: db/json).

    Returns:
        Dict with 'users' and 'properties' counts of inserted rows.
    """
    directory = directory or FIXTURE_DIR
    users = load_fixture("users", directory)
    properties = load_fixture("properties", directory)

    id_map: dict[str, int] = {}
    inserted_users = 0
    for key, data in users.items():
        existing = service.get_user_with_email(data["email"])
        if existing:
            id_map[str(data.get("id", key))] = existing.id
            continue
        created = service.add_user(data)
        id_map[str(data.get("id", key))] = created.id
        inserted_users += 1

    inserted_properties = 0
    for key, data in properties.items():
        record = {k: v for k, v in data.items() if k != "id"}
        owner = str(record.get("owner_id"))
        if owner not in id_map:
            logger.warning(f"Skipping property {key}: unknown owner {owner}")
            continue
        record["owner_id"] = id_map[owner]
        service.add_property(record)
        inserted_properties += 1

    logger.info(f"Seeded {inserted_users} users and {inserted_properties} properties.")
    return {"users": inserted_users, "properties": inserted_properties}


if __name__ == "__main__":
    from db.connection import Database
    from db.init_db import create_tables
    from services.query_service import QueryService

    with Database() as database:
        create_tables(database)
        counts = seed_fixtures(QueryService(database))
    print(f"Seeded {counts['users']} users and {counts['properties']} properties.")
