from sqlalchemy import Column, String, Integer, Float, DateTime, CheckConstraint, Index
from sweetshop.core.database import Base
from datetime import datetime
import enum
import uuid

class SweetCategory(str, enum.Enum):
    CHOCOLATE = "chocolate"
    CANDY = "candy"
    GUMMY = "gummy"
    SWEETS = "sweets"
    LOLLIPOP = "lollipop"
    CAKE = "cake"
    COOKIE = "cookie"
    OTHER = "other"

class Sweet(Base):
    __tablename__ = "sweets"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_sweets_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_sweets_price_non_negative"),
        Index("ix_sweets_category_price", "category", "price"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False, index=True)
    category = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    description = Column(String(500), nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
