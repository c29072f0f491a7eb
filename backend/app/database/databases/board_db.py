"""
Board database configuration.
Stores messages left by the team on the shared message board.
"""

DB_NAME = "board_db"


class Collections:
    """Collection names in board_db."""
    MESSAGES = "messages"
    METADATA = "_metadata"


# Manifest for registry
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Team message board",
    "collections": [Collections.MESSAGES, Collections.METADATA],
    "access_level": "standard",
}
