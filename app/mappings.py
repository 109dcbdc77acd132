"""
Reglas de mapeo entre entidades persistidas y DTOs.

Los campos derivados por el store (total, timestamps y la colección de
detalles) nunca se copian desde un DTO de entrada.
"""
from typing import Optional
from app.models.order import Order
from app.models.order_detail import OrderDetail
from app.schemas.order import OrderCreate, OrderUpdate, OrderResponse
from app.schemas.order_detail import OrderDetailCreate, OrderDetailResponse

STORE_DERIVED_ORDER_FIELDS = frozenset(
    {"id", "total_amount", "created_at", "updated_at", "order_details"}
)
ROUTE_BOUND_DETAIL_FIELDS = frozenset({"id", "order_id", "order"})


def _inbound(obj_in, excluded: frozenset) -> dict:
    return {
        field: value
        for field, value in obj_in.model_dump().items()
        if field not in excluded
    }


def detail_from_create(obj_in: OrderDetailCreate, *, order_id: Optional[int] = None) -> OrderDetail:
    """Construye un OrderDetail transitorio; `order_id` viene de la ruta."""
    db_obj = OrderDetail(**_inbound(obj_in, ROUTE_BOUND_DETAIL_FIELDS))
    if order_id is not None:
        db_obj.order_id = order_id
    return db_obj


def order_from_create(obj_in: OrderCreate) -> Order:
    """
    Construye una orden transitoria a partir del DTO de creación.

    Los detalles se mapean por separado; el total y los timestamps los
    asigna el store al persistir.
    """
    db_obj = Order(**_inbound(obj_in, STORE_DERIVED_ORDER_FIELDS))
    db_obj.order_details = [detail_from_create(d) for d in obj_in.order_details]
    return db_obj


def order_from_update(obj_in: OrderUpdate, *, order_id: int) -> Order:
    """Orden transitoria con el id de la ruta y solo los campos editables."""
    db_obj = Order(**_inbound(obj_in, STORE_DERIVED_ORDER_FIELDS))
    db_obj.id = order_id
    return db_obj


def order_to_response(order: Order) -> OrderResponse:
    return OrderResponse.model_validate(order)


def detail_to_response(detail: OrderDetail) -> OrderDetailResponse:
    return OrderDetailResponse.model_validate(detail)
