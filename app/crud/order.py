from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from app.crud.base import CRUDBase, check_page, order_total, utcnow
from app.models.order import Order
import logging

logger = logging.getLogger(__name__)


class CRUDOrder(CRUDBase[Order]):
    def list_orders(
        self, db: Session, *, page: int = 1, page_size: int = 10
    ) -> List[Order]:
        check_page(page, page_size)
        if self.past_last_page(db, page=page, page_size=page_size):
            return []
        return (
            db.query(Order)
            .options(selectinload(Order.order_details))
            .order_by(Order.created_at.desc(), Order.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )

    def get_order(self, db: Session, *, id: int) -> Optional[Order]:
        return (
            db.query(Order)
            .options(selectinload(Order.order_details))
            .filter(Order.id == id)
            .first()
        )

    def create_order(self, db: Session, *, db_obj: Order) -> Order:
        """
        Persiste una orden nueva junto con sus detalles en un único commit.

        El total se calcula a partir de los detalles; sin detalles se conserva
        el valor recibido (0 por defecto).
        """
        now = utcnow()
        db_obj.created_at = now
        db_obj.updated_at = now

        if db_obj.order_details:
            db_obj.total_amount = order_total(db_obj.order_details)
        elif db_obj.total_amount is None:
            db_obj.total_amount = Decimal("0")

        db.add(db_obj)
        self.commit(db)
        db.refresh(db_obj)
        logger.info(f"Orden {db_obj.id} creada con total {db_obj.total_amount}")
        return db_obj

    def update_order(self, db: Session, *, db_obj: Order) -> Optional[Order]:
        """
        Actualiza una orden existente.

        Solo se copian `customer_name` y `status`. El total se recalcula con
        los detalles ya persistidos; los detalles de `db_obj` se ignoran.

        Returns:
            Orden actualizada o None si no existe
        """
        existing = self.get_order(db, id=db_obj.id)
        if existing is None:
            return None

        existing.customer_name = db_obj.customer_name
        existing.status = db_obj.status
        existing.updated_at = utcnow()

        if existing.order_details:
            existing.total_amount = order_total(existing.order_details)

        self.commit(db)
        db.refresh(existing)
        return existing

    def delete_order(self, db: Session, *, id: int) -> bool:
        obj = self.get(db, id=id)
        if obj is None:
            return False
        db.delete(obj)
        self.commit(db)
        return True

    def count_orders(self, db: Session) -> int:
        return self.count(db)

    def order_exists(self, db: Session, *, id: int) -> bool:
        return self.exists(db, id=id)


order = CRUDOrder(Order)
