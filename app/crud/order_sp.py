import json
from typing import Any, Iterable, List, Mapping, Optional
from sqlalchemy import text
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase, check_page
from app.models.order import Order
from app.models.order_detail import OrderDetail
import logging

logger = logging.getLogger(__name__)


def orders_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[Order]:
    """
    Agrupa las filas orden+detalle devueltas por las funciones almacenadas.

    Cada fila repite los datos de la orden; `detail_id` es NULL para una
    orden sin detalles. Se conserva el orden en que llegan las filas.
    """
    orders = {}
    for row in rows:
        db_obj = orders.get(row["order_id"])
        if db_obj is None:
            db_obj = Order(
                id=row["order_id"],
                customer_name=row["customer_name"],
                total_amount=row["total_amount"],
                status=row["status"],
                created_at=row["created_at"],
                updated_at=row["updated_at"],
            )
            db_obj.order_details = []
            orders[row["order_id"]] = db_obj
        if row["detail_id"] is not None:
            db_obj.order_details.append(
                OrderDetail(
                    id=row["detail_id"],
                    order_id=row["order_id"],
                    product_name=row["product_name"],
                    quantity=row["quantity"],
                    price=row["price"],
                )
            )
    return list(orders.values())


class CRUDOrderSP(CRUDBase[Order]):
    """
    Backend de órdenes sobre funciones almacenadas de PostgreSQL.

    Conteo y existencia usan consultas normales, igual que el backend ORM.
    """

    def list_orders(
        self, db: Session, *, page: int = 1, page_size: int = 10
    ) -> List[Order]:
        check_page(page, page_size)
        if self.past_last_page(db, page=page, page_size=page_size):
            return []
        rows = db.execute(
            text("SELECT * FROM get_orders_paginated(:page_number, :page_size)"),
            {"page_number": page, "page_size": page_size},
        ).mappings().all()
        return orders_from_rows(rows)

    def get_order(self, db: Session, *, id: int) -> Optional[Order]:
        rows = db.execute(
            text("SELECT * FROM get_order_with_details(:order_id)"),
            {"order_id": id},
        ).mappings().all()
        orders = orders_from_rows(rows)
        return orders[0] if orders else None

    def create_order(self, db: Session, *, db_obj: Order) -> Order:
        details = [
            {
                "product_name": d.product_name,
                "quantity": d.quantity,
                "price": str(d.price),
            }
            for d in db_obj.order_details or []
        ]
        new_id = db.execute(
            text("SELECT create_order(:customer_name, :status, CAST(:order_details AS jsonb))"),
            {
                "customer_name": db_obj.customer_name,
                "status": int(db_obj.status),
                "order_details": json.dumps(details),
            },
        ).scalar_one()
        self.commit(db)
        logger.info(f"Orden {new_id} creada mediante create_order")
        return self.get_order(db, id=new_id)

    def update_order(self, db: Session, *, db_obj: Order) -> Optional[Order]:
        found = db.execute(
            text("SELECT update_order(:order_id, :customer_name, :status)"),
            {
                "order_id": db_obj.id,
                "customer_name": db_obj.customer_name,
                "status": int(db_obj.status),
            },
        ).scalar_one()
        self.commit(db)
        if not found:
            return None
        return self.get_order(db, id=db_obj.id)

    def delete_order(self, db: Session, *, id: int) -> bool:
        affected = db.execute(
            text("SELECT delete_order(:order_id)"), {"order_id": id}
        ).scalar_one()
        self.commit(db)
        return affected > 0

    def count_orders(self, db: Session) -> int:
        return self.count(db)

    def order_exists(self, db: Session, *, id: int) -> bool:
        return self.exists(db, id=id)


order_sp = CRUDOrderSP(Order)
