from app.models.order import Order, OrderStatus
from app.models.order_detail import OrderDetail

__all__ = ["Order", "OrderStatus", "OrderDetail"]
