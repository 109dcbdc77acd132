from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session
from app.api import deps
from app.core.config import settings
from app.crud.interface import OrderStore
from app.mappings import order_from_create, order_from_update, order_to_response
from app.schemas.order import OrderCreate, OrderUpdate, OrderResponse, OrderList
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=OrderList)
def list_orders(
    response: Response,
    db: Session = Depends(deps.get_db),
    orders: OrderStore = Depends(deps.get_orders),
    page: int = Query(1, ge=1, description="Número de página, empezando en 1"),
    page_size: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Órdenes por página",
    ),
):
    """
    Listar órdenes, de la más reciente a la más antigua.

    Args:
        `page`: Página solicitada
        `page_size`: Número de órdenes por página

    Returns:
        `OrderList`: Página de órdenes con sus detalles y el total de órdenes.
        Los mismos metadatos se exponen en las cabeceras `X-Total-Count`,
        `X-Page` y `X-Page-Size`.
    """
    logger.info(f"Listando órdenes: página {page}, tamaño {page_size}")
    db_orders = orders.list_orders(db, page=page, page_size=page_size)
    total = orders.count_orders(db)

    response.headers["X-Total-Count"] = str(total)
    response.headers["X-Page"] = str(page)
    response.headers["X-Page-Size"] = str(page_size)

    return OrderList(
        orders=[order_to_response(o) for o in db_orders],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    db: Session = Depends(deps.get_db),
    orders: OrderStore = Depends(deps.get_orders),
):
    """
    Obtener una orden con sus detalles.

    Raises:
        `HTTPException`: 404 si la orden no existe
    """
    logger.info(f"Obteniendo orden {order_id}")
    db_order = orders.get_order(db, id=order_id)
    if not db_order:
        logger.warning(f"Orden {order_id} no encontrada")
        raise HTTPException(status_code=404, detail="Orden no encontrada")
    return order_to_response(db_order)


@router.post("", response_model=OrderResponse, status_code=201)
def create_order(
    *,
    request: Request,
    response: Response,
    db: Session = Depends(deps.get_db),
    orders: OrderStore = Depends(deps.get_orders),
    order_in: OrderCreate,
):
    """
    Crear una orden con sus detalles.

    El total se calcula a partir de los detalles; el estado por defecto es
    `Pending`.

    Example:
        ```json
        {
          "customer_name": "Acme",
          "order_details": [
            {"product_name": "Widget", "quantity": 2, "price": 10.00},
            {"product_name": "Gadget", "quantity": 1, "price": 5.00}
          ]
        }
        ```
    """
    logger.info(f"Creando orden para el cliente '{order_in.customer_name}'")
    created_order = orders.create_order(db, db_obj=order_from_create(order_in))
    response.headers["Location"] = str(request.url_for("get_order", order_id=created_order.id))
    return order_to_response(created_order)


@router.put("/{order_id}", status_code=204)
def update_order(
    *,
    db: Session = Depends(deps.get_db),
    orders: OrderStore = Depends(deps.get_orders),
    order_id: int,
    order_in: OrderUpdate,
):
    """
    Actualizar nombre de cliente y estado de una orden.

    Los detalles no se modifican; el total se recalcula con los existentes.

    Raises:
        `HTTPException`: 404 si la orden no existe
    """
    logger.info(f"Actualizando orden {order_id}")
    updated_order = orders.update_order(db, db_obj=order_from_update(order_in, order_id=order_id))
    if updated_order is None:
        logger.warning(f"Orden {order_id} no encontrada")
        raise HTTPException(status_code=404, detail="Orden no encontrada")
    return Response(status_code=204)


@router.delete("/{order_id}", status_code=204)
def delete_order(
    *,
    db: Session = Depends(deps.get_db),
    orders: OrderStore = Depends(deps.get_orders),
    order_id: int,
):
    """
    Eliminar una orden junto con sus detalles.

    Raises:
        `HTTPException`: 404 si la orden no existe
    """
    logger.info(f"Eliminando orden {order_id}")
    if not orders.delete_order(db, id=order_id):
        logger.warning(f"Orden {order_id} no encontrada")
        raise HTTPException(status_code=404, detail="Orden no encontrada")
    return Response(status_code=204)
