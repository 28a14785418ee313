import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from sweetshop.core.errors import InvalidRequestError, NotFoundError
from sweetshop.models.sweet import Sweet, SweetCategory
from sweetshop.schemas.sweet import SweetCreate, SweetUpdate

logger = logging.getLogger(__name__)

def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"

def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0

class InventoryService:
    """
    Validated reads and writes over the sweets table.

    Stock adjustments are single conditional UPDATE statements, so two
    concurrent purchases can never take the quantity below zero.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, sweet_id: str) -> Sweet:
        sweet = self.db.get(Sweet, sweet_id)
        if not sweet:
            raise NotFoundError("Sweet not found")
        return sweet

    def list_all(self) -> List[Sweet]:
        return self.db.query(Sweet).order_by(Sweet.created_at.desc()).all()

    def search(
        self,
        q: Optional[str] = None,
        category: Optional[SweetCategory] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Sweet], int]:
        """
        Returns one page of matching sweets and the total match count.

        Any whitespace-separated term of ``q`` may match name, category
        or description. Price bounds are inclusive.
        """
        query = self.db.query(Sweet)

        terms = (q or "").split()
        if terms:
            query = query.filter(or_(*[
                or_(
                    Sweet.name.ilike(_like_pattern(term), escape="\\"),
                    Sweet.category.ilike(_like_pattern(term), escape="\\"),
                    Sweet.description.ilike(_like_pattern(term), escape="\\"),
                )
                for term in terms
            ]))
        if category:
            query = query.filter(Sweet.category == SweetCategory(category).value)
        if min_price is not None:
            query = query.filter(Sweet.price >= min_price)
        if max_price is not None:
            query = query.filter(Sweet.price <= max_price)

        total = query.count()
        sweets = (
            query.order_by(Sweet.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return sweets, total

    def create(self, sweet_in: SweetCreate) -> Sweet:
        sweet = Sweet(
            name=sweet_in.name,
            category=sweet_in.category.value,
            price=sweet_in.price,
            quantity=sweet_in.quantity,
            description=sweet_in.description,
            image_url=str(sweet_in.image_url) if sweet_in.image_url else None,
        )
        self.db.add(sweet)
        self.db.commit()
        self.db.refresh(sweet)
        logger.info(f"Created sweet {sweet.id} ({sweet.name}) with quantity {sweet.quantity}")
        return sweet

    def update(self, sweet_id: str, sweet_in: SweetUpdate) -> Sweet:
        sweet = self.get(sweet_id)
        changes: Dict[str, Any] = sweet_in.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if field == "category":
                value = SweetCategory(value).value
            elif field == "image_url" and value is not None:
                value = str(value)
            setattr(sweet, field, value)
        sweet.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(sweet)
        logger.info(f"Updated sweet {sweet.id}: {sorted(changes)}")
        return sweet

    def delete(self, sweet_id: str) -> None:
        sweet = self.get(sweet_id)
        self.db.delete(sweet)
        self.db.commit()
        logger.info(f"Deleted sweet {sweet_id}")

    def purchase(self, sweet_id: str, quantity: Optional[int]) -> Sweet:
        if quantity is None or quantity <= 0:
            raise InvalidRequestError("Quantity must be greater than 0")

        updated = (
            self.db.query(Sweet)
            .filter(Sweet.id == sweet_id, Sweet.quantity >= quantity)
            .update(
                {Sweet.quantity: Sweet.quantity - quantity, Sweet.updated_at: datetime.utcnow()},
                synchronize_session=False,
            )
        )
        if not updated:
            # Nothing matched: either the sweet is gone or stock is short
            self.get(sweet_id)
            raise InvalidRequestError("Insufficient stock")

        self.db.commit()
        sweet = self.get(sweet_id)
        logger.info(f"Purchased {quantity} of sweet {sweet_id}, {sweet.quantity} left")
        return sweet

    def restock(self, sweet_id: str, quantity: Optional[int]) -> Sweet:
        if not quantity or quantity <= 0:
            raise InvalidRequestError("Quantity must be greater than 0")

        updated = (
            self.db.query(Sweet)
            .filter(Sweet.id == sweet_id)
            .update(
                {Sweet.quantity: Sweet.quantity + quantity, Sweet.updated_at: datetime.utcnow()},
                synchronize_session=False,
            )
        )
        if not updated:
            raise NotFoundError("Sweet not found")

        self.db.commit()
        sweet = self.get(sweet_id)
        logger.info(f"Restocked {quantity} of sweet {sweet_id}, now {sweet.quantity}")
        return sweet
