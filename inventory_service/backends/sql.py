"""
Relational product storage backed by SQLAlchemy (PostgreSQL in production).

Every call opens its own session from the shared, bounded connection pool and
commits or rolls back before returning.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import distinct, func, select

from ..db import Base, make_session_factory
from ..models import Product
from .base import (
    BackendMode,
    ProductBackend,
    next_timestamp,
    parse_product_id,
    prepare_fields,
)
from .seed import RELATIONAL_SEED

logger = logging.getLogger(__name__)


class SQLBackend(ProductBackend):
    mode = BackendMode.RELATIONAL

    def __init__(self, engine):
        self.engine = engine
        self.SessionLocal = make_session_factory(engine)

    def initialize_schema(self) -> None:
        """Create the products table if needed and seed it when empty."""
        Base.metadata.create_all(bind=self.engine)
        with self.SessionLocal() as db:
            count = db.scalar(select(func.count(Product.id)))
            if count == 0:
                db.add_all(Product(**fields) for fields in RELATIONAL_SEED)
                db.commit()
                logger.info("Sample data inserted successfully.")

    def list_products(self) -> List[Dict[str, Any]]:
        with self.SessionLocal() as db:
            products = (
                db.query(Product)
                .order_by(Product.created_at.desc(), Product.id.desc())
                .all()
            )
            return [p.to_dict() for p in products]

    def get_product(self, product_id: Any) -> Optional[Dict[str, Any]]:
        product_id = parse_product_id(product_id)
        if product_id is None:
            return None
        with self.SessionLocal() as db:
            product = db.get(Product, product_id)
            return product.to_dict() if product is not None else None

    def create_product(self, fields: Dict[str, Any]) -> int:
        product = Product(**prepare_fields(fields))
        with self.SessionLocal() as db:
            try:
                db.add(product)
                db.commit()
            except Exception:
                db.rollback()
                raise
            return product.id

    def update_product(self, product_id: Any, fields: Dict[str, Any]) -> bool:
        product_id = parse_product_id(product_id)
        if product_id is None:
            return False
        with self.SessionLocal() as db:
            product = db.get(Product, product_id)
            if product is None:
                return False
            values = prepare_fields(fields)
            try:
                for column, value in values.items():
                    setattr(product, column, value)
                # Explicit so the timestamp moves even when no value changed.
                product.updated_at = next_timestamp(after=product.updated_at)
                db.commit()
            except Exception:
                db.rollback()
                raise
            return True

    def delete_product(self, product_id: Any) -> bool:
        product_id = parse_product_id(product_id)
        if product_id is None:
            return False
        with self.SessionLocal() as db:
            product = db.get(Product, product_id)
            if product is None:
                return False
            try:
                db.delete(product)
                db.commit()
            except Exception:
                db.rollback()
                raise
            return True

    def get_stats(self) -> Dict[str, Any]:
        query = select(
            func.count(Product.id),
            func.coalesce(func.sum(Product.quantity), 0),
            func.count(distinct(Product.category)),
            func.coalesce(func.sum(Product.quantity * Product.price), 0),
        )
        with self.SessionLocal() as db:
            total_products, total_items, categories, total_value = db.execute(query).one()
        return {
            "total_products": int(total_products),
            "total_items": int(total_items),
            "categories": int(categories),
            "total_value": float(total_value),
        }
