"""
Storage contract shared by the relational and in-memory backends.

Both implementations return products as plain dicts with all seven fields
populated, and signal absence with ``None`` (lookups) or ``False`` (writes).
"""

import enum
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

# Range of the SERIAL / INTEGER id column.
MIN_PRODUCT_ID = -(2**31)
MAX_PRODUCT_ID = 2**31 - 1

# Columns declared NOT NULL on the products table.
REQUIRED_COLUMNS = ("name", "category", "quantity", "price")


class BackendMode(str, enum.Enum):
    RELATIONAL = "postgresql"
    IN_MEMORY = "memory"


def parse_product_id(raw: Any) -> Optional[int]:
    """Interpret a path segment as a product id; non-numeric or out-of-range input matches nothing."""
    try:
        product_id = int(raw)
    except (TypeError, ValueError):
        return None
    if not MIN_PRODUCT_ID <= product_id <= MAX_PRODUCT_ID:
        return None
    return product_id


def prepare_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize the mutable product fields before they are stored.

    Raises ``ValueError`` when a NOT NULL column has no value or when
    quantity/price cannot be read as numbers.
    """
    for column in REQUIRED_COLUMNS:
        if fields.get(column) is None:
            raise ValueError(f'Missing value for column "{column}"')
    return {
        "name": fields["name"],
        "category": fields["category"],
        "quantity": int(fields["quantity"]),
        "price": float(fields["price"]),
        "description": fields.get("description") or "",
    }


def next_timestamp(after: Optional[datetime] = None) -> datetime:
    """Current UTC time, strictly later than ``after`` when given."""
    now = datetime.now(timezone.utc)
    if after is not None:
        if after.tzinfo is None:
            # Naive values are stored in UTC (SQLite CURRENT_TIMESTAMP).
            now = now.replace(tzinfo=None)
        if now <= after:
            now = after + timedelta(microseconds=1)
    return now


class ProductBackend(ABC):
    mode: BackendMode

    @abstractmethod
    def list_products(self) -> List[Dict[str, Any]]:
        """All products, newest ``created_at`` first."""

    @abstractmethod
    def get_product(self, product_id: Any) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def create_product(self, fields: Dict[str, Any]) -> int:
        """Store a new product and return its assigned id."""

    @abstractmethod
    def update_product(self, product_id: Any, fields: Dict[str, Any]) -> bool:
        """Overwrite every mutable field; ``False`` when the id is unknown."""

    @abstractmethod
    def delete_product(self, product_id: Any) -> bool:
        ...

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """Return total_products, total_items, categories and total_value."""
