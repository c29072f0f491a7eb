"""
Sales database configuration.
Stores purchase orders and the sequential order counter.
"""

DB_NAME = "sales_db"

ORDER_COUNTER_ID = "order_counter"


class Collections:
    """Collection names in sales_db."""
    ORDERS = "orders"
    COUNTERS = "counters"
    METADATA = "_metadata"


# Manifest for registry
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Purchase orders and order numbering",
    "collections": [Collections.ORDERS, Collections.COUNTERS, Collections.METADATA],
    "access_level": "standard",
}
