import logging

from sqlalchemy.orm import Session
from sweetshop.core.config import settings
from sweetshop.core.database import SessionLocal, engine, Base
from sweetshop.core.observability import configure_logging
from sweetshop.models.sweet import Sweet, SweetCategory
from sweetshop.services.auth import ensure_admin

logger = logging.getLogger(__name__)

SAMPLE_SWEETS = [
    {"name": "Dark Chocolate Bar", "category": SweetCategory.CHOCOLATE, "price": 3.5, "quantity": 40,
     "description": "70% cocoa, single origin"},
    {"name": "Milk Chocolate Truffles", "category": SweetCategory.CHOCOLATE, "price": 8.0, "quantity": 25,
     "description": "Box of twelve hand-rolled truffles"},
    {"name": "Sour Gummy Worms", "category": SweetCategory.GUMMY, "price": 2.25, "quantity": 60,
     "description": "Tangy fruit-flavoured gummies"},
    {"name": "Rainbow Lollipop", "category": SweetCategory.LOLLIPOP, "price": 1.5, "quantity": 80},
    {"name": "Peppermint Candy", "category": SweetCategory.CANDY, "price": 0.75, "quantity": 120,
     "description": "Classic striped mints"},
    {"name": "Kaju Katli", "category": SweetCategory.SWEETS, "price": 12.0, "quantity": 15,
     "description": "Cashew fudge with silver leaf"},
    {"name": "Red Velvet Slice", "category": SweetCategory.CAKE, "price": 4.75, "quantity": 10},
    {"name": "Oatmeal Raisin Cookie", "category": SweetCategory.COOKIE, "price": 1.25, "quantity": 0,
     "description": "Baked fresh every morning"},
]

def seed_sweets(db: Session) -> int:
    """Insert the sample catalogue when the sweets table is empty."""
    if db.query(Sweet).first():
        return 0
    for item in SAMPLE_SWEETS:
        db.add(Sweet(**{**item, "category": item["category"].value}))
    db.commit()
    return len(SAMPLE_SWEETS)

def seed_db():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if settings.FIRST_ADMIN_EMAIL and settings.FIRST_ADMIN_PASSWORD:
            admin = ensure_admin(
                db,
                settings.FIRST_ADMIN_EMAIL,
                settings.FIRST_ADMIN_PASSWORD,
                settings.FIRST_ADMIN_NAME,
            )
            logger.info(f"Admin account: {admin.email}")
        else:
            logger.info("FIRST_ADMIN_EMAIL/FIRST_ADMIN_PASSWORD not set, skipping admin")

        created = seed_sweets(db)
        if created:
            logger.info(f"Created {created} sample sweets")
        else:
            logger.info("Sweets already present, skipping catalogue")
    finally:
        db.close()

if __name__ == "__main__":
    configure_logging()
    seed_db()
