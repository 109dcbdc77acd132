from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session
from app.api import deps
from app.crud.interface import OrderDetailStore, OrderStore
from app.mappings import detail_from_create, detail_to_response
from app.schemas.order_detail import OrderDetailCreate, OrderDetailResponse
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_order(db: Session, orders: OrderStore, order_id: int) -> None:
    if not orders.order_exists(db, id=order_id):
        logger.warning(f"Orden {order_id} no encontrada")
        raise HTTPException(status_code=404, detail="Orden no encontrada")


@router.get("/orders/{order_id}/order-details", response_model=List[OrderDetailResponse])
def list_order_details(
    order_id: int,
    db: Session = Depends(deps.get_db),
    orders: OrderStore = Depends(deps.get_orders),
    order_details: OrderDetailStore = Depends(deps.get_order_details),
):
    """
    Listar los detalles de una orden.

    Raises:
        `HTTPException`: 404 si la orden no existe
    """
    logger.info(f"Obteniendo detalles de la orden {order_id}")
    _require_order(db, orders, order_id)
    return [detail_to_response(d) for d in order_details.list_by_order(db, order_id=order_id)]


@router.post(
    "/orders/{order_id}/order-details",
    response_model=OrderDetailResponse,
    status_code=201,
)
def create_order_detail(
    *,
    request: Request,
    response: Response,
    db: Session = Depends(deps.get_db),
    orders: OrderStore = Depends(deps.get_orders),
    order_details: OrderDetailStore = Depends(deps.get_order_details),
    order_id: int,
    detail_in: OrderDetailCreate,
):
    """
    Agregar un producto a una orden existente.

    El total de la orden aumenta en `price * quantity`.

    Raises:
        `HTTPException`: 404 si la orden no existe
    """
    logger.info(f"Agregando el producto '{detail_in.product_name}' a la orden {order_id}")
    _require_order(db, orders, order_id)

    created_detail = order_details.create(db, db_obj=detail_from_create(detail_in, order_id=order_id))
    response.headers["Location"] = str(request.url_for("list_order_details", order_id=order_id))
    return detail_to_response(created_detail)


@router.delete("/order-details/{detail_id}", status_code=204)
def delete_order_detail(
    *,
    db: Session = Depends(deps.get_db),
    order_details: OrderDetailStore = Depends(deps.get_order_details),
    detail_id: int,
):
    """
    Eliminar un detalle; el total de su orden disminuye en `price * quantity`.

    Raises:
        `HTTPException`: 404 si el detalle no existe
    """
    logger.info(f"Eliminando detalle {detail_id}")
    if not order_details.delete(db, id=detail_id):
        logger.warning(f"Detalle {detail_id} no encontrado")
        raise HTTPException(status_code=404, detail="Detalle de orden no encontrado")
    return Response(status_code=204)
