import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["USE_STORED_PROCEDURES"] = "false"

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.core.database import Base
from app.main import app
from app.models import Order, OrderDetail, OrderStatus

BASE_TIME = datetime(2024, 1, 31, 12, 0, 0, tzinfo=timezone.utc)


def seed_orders(db, count: int = 10) -> None:
    """Order i is created i days before BASE_TIME, so order 1 is the newest."""
    for i in range(1, count + 1):
        created_at = BASE_TIME - timedelta(days=i)
        db.add(
            Order(
                id=i,
                customer_name=f"Customer {i}",
                total_amount=Decimal(i * 100),
                status=OrderStatus(i % 3),
                created_at=created_at,
                updated_at=created_at,
                order_details=[
                    OrderDetail(
                        id=i * 2 - 1,
                        product_name=f"Product {i}A",
                        quantity=i,
                        price=Decimal("50.00"),
                    ),
                    OrderDetail(
                        id=i * 2,
                        product_name=f"Product {i}B",
                        quantity=i,
                        price=Decimal("50.00"),
                    ),
                ],
            )
        )
    db.commit()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    seed_orders(session)
    yield session
    session.close()


@pytest.fixture
def client(db, session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[deps.get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
