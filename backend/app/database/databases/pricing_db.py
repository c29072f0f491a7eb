"""
Pricing database configuration.
Stores the JPY/BRL reference rate used to price machines, and its history.
"""

DB_NAME = "pricing_db"

EXCHANGE_RATE_CONFIG_ID = "exchange_rate"


class Collections:
    """Collection names in pricing_db."""
    APP_CONFIG = "app_config"
    EXCHANGE_RATE_HISTORY = "exchange_rate_history"
    METADATA = "_metadata"


# Manifest for registry
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Reference exchange rate and its change history",
    "collections": [
        Collections.APP_CONFIG,
        Collections.EXCHANGE_RATE_HISTORY,
        Collections.METADATA,
    ],
    "access_level": "standard",
}
