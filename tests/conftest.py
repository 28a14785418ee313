import os

# The application engine must never touch a file database during tests
os.environ["SQLALCHEMY_DATABASE_URL"] = "sqlite://"

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sweetshop.main import app
from sweetshop.core.database import Base, get_db
from sweetshop.core.security import get_password_hash
from sweetshop.models.user import User
from sweetshop.models.sweet import Sweet

# Use in-memory SQLite for testing
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session")
def db_engine():
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db(db_engine):
    connection = db_engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def client(db):
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

@pytest.fixture(scope="function")
def test_user(db):
    user = User(
        name="Test Tester",
        email="test_tester@example.com",
        hashed_password=get_password_hash("testpassword"),
        role="user"
    )
    db.add(user)
    db.commit()
    return user

@pytest.fixture(scope="function")
def admin_user(db):
    user = User(
        name="Shop Admin",
        email="admin@example.com",
        hashed_password=get_password_hash("adminpassword"),
        role="admin"
    )
    db.add(user)
    db.commit()
    return user

def _login(client, email, password):
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    token = r.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture(scope="function")
def user_token_headers(client, test_user):
    return _login(client, "test_tester@example.com", "testpassword")

@pytest.fixture(scope="function")
def admin_token_headers(client, admin_user):
    return _login(client, "admin@example.com", "adminpassword")

@pytest.fixture(scope="function")
def sample_sweet(db):
    sweet = Sweet(
        name="Dark Chocolate Bar",
        category="chocolate",
        price=3.5,
        quantity=10,
        description="70% cocoa",
    )
    db.add(sweet)
    db.commit()
    db.refresh(sweet)
    return sweet

@pytest.fixture(scope="function")
def catalogue(db):
    """Five sweets with strictly increasing creation times."""
    base = datetime(2024, 1, 1, 12, 0, 0)
    items = [
        ("Dark Chocolate Bar", "chocolate", 3.5, 10, "Bitter and rich"),
        ("Milk Chocolate Truffles", "chocolate", 8.0, 5, "Box of twelve"),
        ("Sour Gummy Worms", "gummy", 2.25, 30, "Tangy fruit gummies"),
        ("Rainbow Lollipop", "lollipop", 1.5, 0, None),
        ("Red Velvet Slice", "cake", 4.75, 3, "Cream cheese frosting"),
    ]
    sweets = []
    for i, (name, category, price, quantity, description) in enumerate(items):
        sweet = Sweet(
            name=name,
            category=category,
            price=price,
            quantity=quantity,
            description=description,
            created_at=base + timedelta(minutes=i),
            updated_at=base + timedelta(minutes=i),
        )
        db.add(sweet)
        sweets.append(sweet)
    db.commit()
    return sweets
