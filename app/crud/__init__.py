from typing import Optional
from app.core.config import settings
from .interface import OrderDetailStore, OrderStore
from .order import order
from .order_detail import order_detail
from .order_sp import order_sp
from .order_detail_sp import order_detail_sp


def get_order_store(use_stored_procedures: Optional[bool] = None) -> OrderStore:
    if use_stored_procedures is None:
        use_stored_procedures = settings.USE_STORED_PROCEDURES
    return order_sp if use_stored_procedures else order


def get_order_detail_store(use_stored_procedures: Optional[bool] = None) -> OrderDetailStore:
    if use_stored_procedures is None:
        use_stored_procedures = settings.USE_STORED_PROCEDURES
    return order_detail_sp if use_stored_procedures else order_detail
