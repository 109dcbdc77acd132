from typing import Generator
from app.core.database import SessionLocal
from app.crud import get_order_detail_store, get_order_store
from app.crud.interface import OrderDetailStore, OrderStore


def get_db() -> Generator:
    try:
        db = SessionLocal()
        yield db
    finally:
        db.close()


def get_orders() -> OrderStore:
    return get_order_store()


def get_order_details() -> OrderDetailStore:
    return get_order_detail_store()
