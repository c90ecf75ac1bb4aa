"""
In-process product storage used when PostgreSQL is unreachable at startup.

Data lives in a dict owned by the backend instance and is lost when the
process exits. There is no locking: concurrent writes to the same product
race and the last one wins.
"""

import itertools
from typing import Any, Dict, List, Optional

from .base import (
    BackendMode,
    ProductBackend,
    next_timestamp,
    parse_product_id,
    prepare_fields,
)
from .seed import MEMORY_SEED


class MemoryBackend(ProductBackend):
    mode = BackendMode.IN_MEMORY

    def __init__(self, seed: Optional[List[Dict[str, Any]]] = None):
        self._products: Dict[int, Dict[str, Any]] = {}
        self._ids = itertools.count(1)
        for fields in MEMORY_SEED if seed is None else seed:
            self.create_product(fields)

    def list_products(self) -> List[Dict[str, Any]]:
        products = sorted(
            self._products.values(),
            key=lambda p: (p["created_at"], p["id"]),
            reverse=True,
        )
        return [dict(p) for p in products]

    def get_product(self, product_id: Any) -> Optional[Dict[str, Any]]:
        product = self._products.get(parse_product_id(product_id))
        return dict(product) if product is not None else None

    def create_product(self, fields: Dict[str, Any]) -> int:
        values = prepare_fields(fields)
        now = next_timestamp()
        product_id = next(self._ids)
        self._products[product_id] = {
            "id": product_id,
            **values,
            "created_at": now,
            "updated_at": now,
        }
        return product_id

    def update_product(self, product_id: Any, fields: Dict[str, Any]) -> bool:
        current = self._products.get(parse_product_id(product_id))
        if current is None:
            return False
        values = prepare_fields(fields)
        current.update(values, updated_at=next_timestamp(after=current["updated_at"]))
        return True

    def delete_product(self, product_id: Any) -> bool:
        return self._products.pop(parse_product_id(product_id), None) is not None

    def get_stats(self) -> Dict[str, Any]:
        products = list(self._products.values())
        return {
            "total_products": len(products),
            "total_items": sum(p["quantity"] for p in products),
            "categories": len({p["category"] for p in products}),
            "total_value": sum(p["quantity"] * p["price"] for p in products),
        }
