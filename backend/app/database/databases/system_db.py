"""
System database configuration.
Holds the registry of every database the portal owns.
"""

DB_NAME = "system_db"

SCHEMA_VERSION = "1.0"


class Collections:
    """Collection names in system_db."""
    DB_REGISTRY = "db_registry"
    METADATA = "_metadata"


# Manifest for registry
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Database registry and portal metadata",
    "collections": [Collections.DB_REGISTRY, Collections.METADATA],
    "access_level": "system",
}
